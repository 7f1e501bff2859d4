"""
Pairwise Scanner Registration

Finds the rigid transform that maps one scanner's local frame into another's:

1. Correspondences: beacon pairs whose fingerprints share at least
   ``min_overlap - 1`` squared distances are taken to be the same beacon.
2. Orientation search: for each catalog orientation, the first correspondence
   fixes a trial translation; the orientation is accepted when every other
   correspondence produces the same translation.

A failed alignment is an ordinary outcome (most scanner pairs do not overlap)
and is reported as ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple, Union

import numpy as np

from ..utils.geometry import Point, points_to_array
from ..utils.logging import setup_logger
from .fingerprint import FingerprintIndex
from .orientation import Orientation, orientation_catalog
from .scanner import ScannerReport, SolvedScanner

logger = setup_logger(__name__)

Correspondence = Tuple[Point, Point]

# Beacons two genuinely overlapping scanners are guaranteed to share
DEFAULT_MIN_OVERLAP = 12


@dataclass(frozen=True)
class Alignment:
    """Maps points of frame B into frame A: ``a = orientation.apply(b) + translation``."""

    translation: Point
    orientation: Orientation

    @classmethod
    def identity(cls) -> "Alignment":
        return cls(Point.origin(), Orientation.identity())

    def apply(self, point: Point) -> Point:
        return self.orientation.apply(point) + self.translation

    def apply_array(self, points: np.ndarray) -> np.ndarray:
        # mixing int64 with an object operand promotes the result to object
        return self.orientation.apply_array(points) + points_to_array([self.translation])[0]

    def inverse(self) -> "Alignment":
        inv = self.orientation.inverse()
        return Alignment(-inv.apply(self.translation), inv)

    def then(self, other: "Alignment") -> "Alignment":
        """Alignment equivalent to applying self, then other."""
        return Alignment(other.apply(self.translation), self.orientation.then(other.orientation))


def _local_beacons(scanner: Union[ScannerReport, SolvedScanner]) -> Tuple[Point, ...]:
    if isinstance(scanner, SolvedScanner):
        return scanner.relative_beacons
    return scanner.beacons


@dataclass
class PairwiseAligner:
    min_overlap: int = DEFAULT_MIN_OVERLAP
    orientations: Literal["all", "proper"] = "all"
    _catalog: Tuple[Orientation, ...] = field(init=False, repr=False)

    def __post_init__(self):
        if self.min_overlap < 2:
            raise ValueError(f"min_overlap must be at least 2, got {self.min_overlap}")
        self._catalog = orientation_catalog(self.orientations)

    @property
    def min_shared_distances(self) -> int:
        """Fingerprint overlap required for a beacon pair to count as a correspondence."""
        return self.min_overlap - 1

    @property
    def catalog(self) -> Tuple[Orientation, ...]:
        return self._catalog

    # ------------------------ Public API ------------------------
    def find_correspondences(
        self,
        a_points: Sequence[Point],
        b_points: Sequence[Point],
        a_index: Optional[FingerprintIndex] = None,
        b_index: Optional[FingerprintIndex] = None,
    ) -> List[Correspondence]:
        """List (a, b) beacon pairs whose fingerprints overlap enough, in (a, b) index order."""
        if a_index is None:
            a_index = FingerprintIndex.from_points(a_points)
        if b_index is None:
            b_index = FingerprintIndex.from_points(b_points)

        needed = self.min_shared_distances
        if len(a_index.all_distances & b_index.all_distances) < needed:
            return []

        pairs: List[Correspondence] = []
        for i, a_fp in enumerate(a_index):
            if len(a_fp) < needed:
                continue
            for j, b_fp in enumerate(b_index):
                if len(a_fp & b_fp) >= needed:
                    pairs.append((a_points[i], b_points[j]))
        return pairs

    def align_points(
        self,
        a_points: Sequence[Point],
        b_points: Sequence[Point],
        a_index: Optional[FingerprintIndex] = None,
        b_index: Optional[FingerprintIndex] = None,
    ) -> Optional[Alignment]:
        """
        Align beacon set B onto beacon set A.

        Args:
            a_points: Beacons of the reference scanner, in its frame
            b_points: Beacons of the scanner to place, in its own frame
            a_index: Precomputed fingerprints of a_points (computed if None)
            b_index: Precomputed fingerprints of b_points (computed if None)

        Returns:
            The alignment mapping B into A, or None when the scanners do not overlap
        """
        if len(a_points) < self.min_overlap or len(b_points) < self.min_overlap:
            logger.debug(
                f"Skipping alignment: {len(a_points)} vs {len(b_points)} beacons, "
                f"need at least {self.min_overlap} each"
            )
            return None

        pairs = self.find_correspondences(a_points, b_points, a_index, b_index)
        if len(pairs) < self.min_overlap:
            logger.debug(f"Only {len(pairs)} correspondences found (need {self.min_overlap})")
            return None

        return self._search_orientation(pairs)

    def align(
        self,
        scanner_a: Union[ScannerReport, SolvedScanner],
        scanner_b: Union[ScannerReport, SolvedScanner],
        a_index: Optional[FingerprintIndex] = None,
        b_index: Optional[FingerprintIndex] = None,
    ) -> Optional[Alignment]:
        """Align scanner B into scanner A's frame (position-relative for solved scanners)."""
        result = self.align_points(_local_beacons(scanner_a), _local_beacons(scanner_b), a_index, b_index)
        if result is not None:
            logger.debug(
                f"Scanner {scanner_b.scanner_id} -> {scanner_a.scanner_id}: "
                f"orientation {result.orientation}, offset {result.translation}"
            )
        return result

    # ------------------------ Helpers ------------------------
    def _search_orientation(self, pairs: Sequence[Correspondence]) -> Optional[Alignment]:
        a_arr = points_to_array(p for p, _ in pairs)
        b_arr = points_to_array(q for _, q in pairs)
        for orientation in self._catalog:
            offsets = a_arr - orientation.apply_array(b_arr)
            if np.all(offsets == offsets[0]):
                x, y, z = (int(v) for v in offsets[0])
                return Alignment(Point(x, y, z), orientation)
        logger.debug(f"No orientation agrees with all {len(pairs)} correspondences")
        return None


def align(
    scanner_a: Union[ScannerReport, SolvedScanner],
    scanner_b: Union[ScannerReport, SolvedScanner],
    min_overlap: int = DEFAULT_MIN_OVERLAP,
) -> Optional[Alignment]:
    return PairwiseAligner(min_overlap=min_overlap).align(scanner_a, scanner_b)
