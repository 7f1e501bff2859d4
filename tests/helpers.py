"""
Synthetic scanner scenes shared by the test modules.

Every generated world has pairwise-unique squared distances, so fingerprints
never collide by chance and the expected correspondences are exact.
"""

from typing import List, Sequence

import numpy as np

from beacon_registration.alignment import Orientation, ScannerReport
from beacon_registration.utils.geometry import Point


def distinct_distance_points(n: int, seed: int = 0, low: int = -1000, high: int = 1000) -> List[Point]:
    rng = np.random.default_rng(seed)
    points: List[Point] = []
    seen = set()
    while len(points) < n:
        candidate = Point(*(int(v) for v in rng.integers(low, high + 1, size=3)))
        dists = [candidate.squared_distance(p) for p in points]
        if 0 in dists or len(set(dists)) != len(dists) or seen.intersection(dists):
            continue
        points.append(candidate)
        seen.update(dists)
    return points


def observe(scanner_id: int, world: Sequence[Point], position: Point, orientation: Orientation) -> ScannerReport:
    """Report world points as seen by a scanner at position with the given global orientation."""
    inverse = orientation.inverse()
    return ScannerReport(scanner_id, tuple(inverse.apply(w - position) for w in world))
