"""
Beacon Fingerprints

A beacon's fingerprint is the set of squared distances from it to every other
beacon seen by the same scanner. It depends only on intra-scanner geometry, so
it is unchanged by any rotation, reflection or translation of the scanner's
frame. Two beacons from different scanners whose fingerprints share many
values are likely the same physical beacon.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, Iterator, Sequence, Tuple

import numpy as np

from ..utils.geometry import Point, points_to_array
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

Fingerprint = FrozenSet[int]


def _squared_distance_matrix(points: Sequence[Point]) -> np.ndarray:
    # object dtype for large coordinates, see points_to_array
    arr = points_to_array(points)
    diff = arr[:, None, :] - arr[None, :, :]
    return (diff * diff).sum(axis=2)


@dataclass(frozen=True)
class FingerprintIndex:
    """Per-beacon fingerprints of one scanner, in beacon order.

    ``all_distances`` is the union of every fingerprint. Two scanners whose
    unions share too few values cannot produce a single correspondence, which
    lets the aligner reject most scanner pairs without the per-beacon loop.
    """

    fingerprints: Tuple[Fingerprint, ...]
    all_distances: Fingerprint = frozenset()

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "FingerprintIndex":
        n = len(points)
        if n == 0:
            return cls(())
        dist = _squared_distance_matrix(points)
        # A repeated beacon is the same point, not a neighbour at distance 0
        fingerprints = tuple(
            frozenset(int(d) for d in row if d != 0) for row in dist
        )
        return cls(fingerprints, frozenset().union(*fingerprints))

    def __len__(self) -> int:
        return len(self.fingerprints)

    def __getitem__(self, i: int) -> Fingerprint:
        return self.fingerprints[i]

    def __iter__(self) -> Iterator[Fingerprint]:
        return iter(self.fingerprints)

    def shared_distances(self, i: int, other: "FingerprintIndex", j: int) -> int:
        """Number of squared distances beacon i here has in common with beacon j of other."""
        return len(self.fingerprints[i] & other.fingerprints[j])


@dataclass
class FingerprintCache:
    """Computes each scanner's index once and hands it out by key."""

    _indices: Dict[Hashable, FingerprintIndex] = field(default_factory=dict)

    def get(self, key: Hashable, points: Sequence[Point]) -> FingerprintIndex:
        index = self._indices.get(key)
        if index is None:
            index = FingerprintIndex.from_points(points)
            self._indices[key] = index
            logger.debug(f"Fingerprinted scanner {key}: {len(index)} beacons")
        return index

    def __contains__(self, key: Hashable) -> bool:
        return key in self._indices

    def __len__(self) -> int:
        return len(self._indices)
