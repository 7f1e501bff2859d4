"""
Beacon Registration Package

A Python package for registering 3D scanners that each report nearby beacons in
their own unknown orientation and offset. It recovers every scanner's pose in a
single global frame and the deduplicated set of beacons they saw.
Correspondences are found with rotation-invariant distance fingerprints and
confirmed by an exhaustive search over the discrete orientation catalog.
"""

__version__ = "0.1.0"

from .utils import *
from .alignment import *
from .preprocessing import *

__all__ = [
    "alignment",
    "preprocessing",
    "acceleration",
    "utils",
    "visualization",
]
