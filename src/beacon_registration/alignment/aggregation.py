"""
Result aggregation over solved scanners.

Merges the global-frame beacons of every solved scanner into one deduplicated
set and measures how far apart the scanners are.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Dict, List, Sequence

from ..utils.geometry import Point
from .scanner import SolvedScanner


def global_beacons(solved: Sequence[SolvedScanner]) -> List[Point]:
    """Distinct global-frame beacons, sorted."""
    beacons = set()
    for scanner in solved:
        beacons.update(scanner.beacons)
    return sorted(beacons)


def total_beacons(solved: Sequence[SolvedScanner]) -> int:
    return len(global_beacons(solved))


def max_scanner_separation(solved: Sequence[SolvedScanner]) -> int:
    """Largest Manhattan distance between any two scanner positions (0 for fewer than two)."""
    return max(
        (a.position.manhattan_distance(b.position) for a, b in combinations(solved, 2)),
        default=0,
    )


@dataclass
class RegistrationSummary:
    total_beacons: int
    max_scanner_separation: int
    scanners: List[Dict[str, Any]] = field(default_factory=list)
    attempts: int = 0

    @classmethod
    def from_solved(cls, solved: Sequence[SolvedScanner], attempts: int = 0) -> "RegistrationSummary":
        scanners = [
            {
                "scanner_id": s.scanner_id,
                "position": list(s.position),
                "orientation": str(s.orientation),
                "beacons": len(s),
            }
            for s in solved
        ]
        return cls(
            total_beacons=total_beacons(solved),
            max_scanner_separation=max_scanner_separation(solved),
            scanners=scanners,
            attempts=attempts,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_beacons": self.total_beacons,
            "max_scanner_separation": self.max_scanner_separation,
            "alignment_attempts": self.attempts,
            "scanners": self.scanners,
        }


def beacon_observation_counts(solved: Sequence[SolvedScanner]) -> Dict[Point, int]:
    """Number of solved scanners that report each global beacon."""
    counts: Dict[Point, int] = {}
    for scanner in solved:
        for beacon in set(scanner.beacons):
            counts[beacon] = counts.get(beacon, 0) + 1
    return counts
