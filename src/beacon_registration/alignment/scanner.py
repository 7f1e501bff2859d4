"""
Scanner data model: raw reports in local frames and scanners placed in the
global frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from ..utils.geometry import Point
from .orientation import Orientation


@dataclass(frozen=True)
class ScannerReport:
    """Beacons reported by one scanner in its own local frame."""

    scanner_id: int
    beacons: Tuple[Point, ...]

    def __post_init__(self):
        if not isinstance(self.beacons, tuple):
            object.__setattr__(self, "beacons", tuple(self.beacons))
        if not self.beacons:
            raise ValueError(f"Scanner {self.scanner_id} reports no beacons")

    @classmethod
    def from_coordinates(cls, scanner_id: int, coords: Sequence[Sequence[int]]) -> "ScannerReport":
        return cls(scanner_id, tuple(Point(int(x), int(y), int(z)) for x, y, z in coords))

    def __len__(self) -> int:
        return len(self.beacons)


@dataclass(frozen=True)
class SolvedScanner:
    """A scanner whose pose in the global frame is known.

    ``relative_beacons`` are already rotated into the global orientation but
    stay relative to the scanner's own position; ``beacons`` adds the position.
    """

    scanner_id: int
    position: Point
    orientation: Orientation
    relative_beacons: Tuple[Point, ...] = field(repr=False)

    @classmethod
    def reference(cls, report: ScannerReport) -> "SolvedScanner":
        """Anchor a report at the origin with identity orientation."""
        return cls(report.scanner_id, Point.origin(), Orientation.identity(), report.beacons)

    @property
    def beacons(self) -> Tuple[Point, ...]:
        return tuple(b + self.position for b in self.relative_beacons)

    def __len__(self) -> int:
        return len(self.relative_beacons)
