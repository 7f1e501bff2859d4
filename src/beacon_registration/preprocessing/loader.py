"""
Scanner Report Loader

This module reads scanner reports from their line-oriented text format:

    --- scanner 0 ---
    404,-588,-901
    528,-643,409

    --- scanner 1 ---
    686,422,578

Each block is a header followed by one ``x,y,z`` line per beacon; blocks are
separated by blank lines.
"""

import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..alignment.scanner import ScannerReport
from ..utils.geometry import Point
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

_HEADER_RE = re.compile(r"^---\s*scanner\s+(-?\d+)\s*---$")
_POINT_RE = re.compile(r"^(-?\d+)\s*,\s*(-?\d+)\s*,\s*(-?\d+)$")


class ScannerReportLoader:
    """
    A class for loading scanner reports from text files.

    Features:
    - Header and point validation with line numbers in error messages
    - Blank-line tolerant block separation
    - Rejection of scanners without beacons
    """

    def load(self, file_path: str) -> List[ScannerReport]:
        """
        Load scanner reports from a file.

        Args:
            file_path: Path to the text file

        Returns:
            Scanner reports in file order

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file content is malformed
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        logger.info(f"Loading scanner reports from {file_path}")
        reports = self.parse(file_path.read_text(encoding="utf-8"), source=str(file_path))
        logger.info(
            f"Loaded {len(reports)} scanners with {sum(len(r) for r in reports)} beacon observations"
        )
        return reports

    def parse(self, text: str, source: Optional[str] = None) -> List[ScannerReport]:
        """
        Parse scanner reports from text.

        Raises:
            ValueError: On an unrecognised line, a point before any header or
                a scanner without beacons
        """
        where = source or "<input>"
        reports: List[ScannerReport] = []
        current: Optional[Tuple[int, int, List[Point]]] = None  # (scanner_id, header_line, points)

        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue

            header = _HEADER_RE.match(line)
            if header:
                if current is not None:
                    reports.append(self._finish(current, where))
                current = (int(header.group(1)), line_no, [])
                continue

            point = _POINT_RE.match(line)
            if point is None:
                raise ValueError(f"{where}:{line_no}: unrecognised line {line!r}")
            if current is None:
                raise ValueError(f"{where}:{line_no}: beacon listed before any scanner header")
            current[2].append(Point(*(int(v) for v in point.groups())))

        if current is not None:
            reports.append(self._finish(current, where))
        if not reports:
            raise ValueError(f"{where}: no scanner reports found")
        return reports

    @staticmethod
    def _finish(current: Tuple[int, int, List[Point]], where: str) -> ScannerReport:
        scanner_id, header_line, points = current
        if not points:
            raise ValueError(f"{where}:{header_line}: scanner {scanner_id} has no beacons")
        return ScannerReport(scanner_id, tuple(points))


def format_reports(reports: Sequence[ScannerReport]) -> str:
    """Render reports in the text format read by ScannerReportLoader."""
    blocks = []
    for report in reports:
        lines = [f"--- scanner {report.scanner_id} ---"]
        lines.extend(str(b) for b in report.beacons)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"
