"""
Scanner Alignment Module

This module registers scanners that each report beacons in their own rotated,
offset frame:
- Orientation catalog (signed axis permutations)
- Per-beacon distance fingerprints for frame-independent matching
- Pairwise alignment by correspondence agreement
- Incremental assembly of all scanners into one global frame
- Aggregation of the merged beacon set
"""

from .orientation import (
    AxisOrder,
    Flip,
    Orientation,
    ORIENTATIONS,
    PROPER_ORIENTATIONS,
    orientation_catalog,
)
from .fingerprint import FingerprintIndex, FingerprintCache
from .scanner import ScannerReport, SolvedScanner
from .pairwise_registration import Alignment, PairwiseAligner, align
from .global_assembly import AssemblyResult, DisconnectedDatasetError, GlobalAssembler
from .aggregation import (
    RegistrationSummary,
    beacon_observation_counts,
    global_beacons,
    max_scanner_separation,
    total_beacons,
)

__all__ = [
    "AxisOrder",
    "Flip",
    "Orientation",
    "ORIENTATIONS",
    "PROPER_ORIENTATIONS",
    "orientation_catalog",
    "FingerprintIndex",
    "FingerprintCache",
    "ScannerReport",
    "SolvedScanner",
    "Alignment",
    "PairwiseAligner",
    "align",
    "AssemblyResult",
    "DisconnectedDatasetError",
    "GlobalAssembler",
    "RegistrationSummary",
    "beacon_observation_counts",
    "global_beacons",
    "max_scanner_separation",
    "total_beacons",
]
