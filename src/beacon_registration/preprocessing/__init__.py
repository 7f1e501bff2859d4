"""
Input Preprocessing Module

Parsing of scanner report text into ScannerReport objects, and the inverse
formatting used to write synthetic datasets.
"""

from .loader import ScannerReportLoader, format_reports

__all__ = [
    "ScannerReportLoader",
    "format_reports",
]
