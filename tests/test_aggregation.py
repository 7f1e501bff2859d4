"""
Tests for result aggregation over solved scanners.
"""

from beacon_registration.alignment.aggregation import (
    RegistrationSummary,
    beacon_observation_counts,
    global_beacons,
    max_scanner_separation,
    total_beacons,
)
from beacon_registration.alignment.orientation import Orientation
from beacon_registration.alignment.scanner import SolvedScanner
from beacon_registration.utils.geometry import Point


def _solved(scanner_id, position, relative):
    return SolvedScanner(scanner_id, position, Orientation.identity(), tuple(relative))


def test_duplicates_collapse():
    a = _solved(0, Point(0, 0, 0), [Point(1, 1, 1), Point(2, 2, 2)])
    # (1,1,1) again, seen from a scanner at (1,0,0)
    b = _solved(1, Point(1, 0, 0), [Point(0, 1, 1), Point(5, 5, 5)])
    assert global_beacons([a, b]) == [Point(1, 1, 1), Point(2, 2, 2), Point(6, 5, 5)]
    assert total_beacons([a, b]) == 3
    assert beacon_observation_counts([a, b])[Point(1, 1, 1)] == 2


def test_max_separation():
    scanners = [
        _solved(0, Point(0, 0, 0), [Point(0, 0, 1)]),
        _solved(1, Point(68, -1246, -43), [Point(0, 0, 1)]),
        _solved(2, Point(1105, -1205, 1229), [Point(0, 0, 1)]),
        _solved(3, Point(-92, -2380, -20), [Point(0, 0, 1)]),
    ]
    assert max_scanner_separation(scanners) == 3621
    assert max_scanner_separation(scanners[:1]) == 0
    assert max_scanner_separation([]) == 0


def test_summary():
    a = _solved(0, Point(0, 0, 0), [Point(1, 1, 1)])
    b = _solved(4, Point(3, -4, 5), [Point(1, 1, 1)])
    summary = RegistrationSummary.from_solved([a, b], attempts=7)
    data = summary.to_dict()
    assert data["total_beacons"] == 2
    assert data["max_scanner_separation"] == 12
    assert data["alignment_attempts"] == 7
    assert data["scanners"][1] == {
        "scanner_id": 4,
        "position": [3, -4, 5],
        "orientation": "XYZ/+",
        "beacons": 1,
    }
