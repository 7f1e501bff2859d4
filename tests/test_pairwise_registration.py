"""
Tests for pairwise scanner alignment.
"""

import pytest

from beacon_registration.alignment.orientation import AxisOrder, Flip, Orientation, ORIENTATIONS
from beacon_registration.alignment.pairwise_registration import Alignment, PairwiseAligner, align
from beacon_registration.alignment.scanner import ScannerReport, SolvedScanner
from beacon_registration.utils.geometry import Point, array_to_points, points_to_array

from helpers import distinct_distance_points, observe

ROTATION = Orientation(AxisOrder.ZXY, Flip.XY)
MIRROR = Orientation(AxisOrder.YXZ, Flip.NONE)
OFFSET = Point(68, -1246, -43)


def _scanner_pair(orientation=ROTATION, offset=OFFSET, shared=12, extra_a=5, extra_b=7, seed=0):
    world = distinct_distance_points(shared + extra_a + extra_b, seed=seed)
    common = world[:shared]
    a = ScannerReport(0, tuple(common + world[shared:shared + extra_a]))
    b = observe(1, common + world[shared + extra_a:], offset, orientation)
    return a, b


class TestAlign:
    def test_recovers_known_transform(self):
        a, b = _scanner_pair()
        result = align(a, b, min_overlap=12)
        assert result == Alignment(OFFSET, ROTATION)
        assert ROTATION in ORIENTATIONS

    def test_every_proper_rotation_is_recovered(self):
        aligner = PairwiseAligner()
        for orientation in ORIENTATIONS:
            if not orientation.is_proper:
                continue
            a, b = _scanner_pair(orientation=orientation, seed=1)
            assert aligner.align(a, b) == Alignment(OFFSET, orientation)

    def test_mapped_beacons_land_on_reference(self):
        a, b = _scanner_pair(seed=2)
        result = align(a, b)
        mapped = {result.apply(p) for p in b.beacons}
        assert len(mapped & set(a.beacons)) == 12

    def test_symmetry(self):
        a, b = _scanner_pair(seed=3)
        forward = align(a, b)
        backward = align(b, a)
        assert forward is not None and backward is not None
        assert backward == forward.inverse()
        assert forward.then(backward) == Alignment.identity()
        # shared beacons meet at identical coordinates in A's frame
        shared_in_a = set(a.beacons) & {forward.apply(q) for q in b.beacons}
        assert {backward.apply(p) for p in shared_in_a} <= set(b.beacons)

    def test_no_overlap(self):
        world = distinct_distance_points(40, seed=4)
        a = ScannerReport(0, tuple(world[:20]))
        b = ScannerReport(1, tuple(world[20:]))
        assert align(a, b) is None

    def test_too_few_shared_beacons(self):
        a, b = _scanner_pair(shared=11, seed=5)
        assert align(a, b, min_overlap=12) is None
        assert align(a, b, min_overlap=11) == Alignment(OFFSET, ROTATION)

    def test_degenerate_scanner(self):
        a, _ = _scanner_pair(seed=6)
        tiny = ScannerReport(9, a.beacons[:5])
        assert align(a, tiny) is None
        assert align(tiny, a) is None

    def test_mirror_frames_need_full_catalog(self):
        a, b = _scanner_pair(orientation=MIRROR, seed=7)
        assert PairwiseAligner(orientations="all").align(a, b) == Alignment(OFFSET, MIRROR)
        assert PairwiseAligner(orientations="proper").align(a, b) is None

    def test_solved_scanner_uses_relative_beacons(self):
        a, b = _scanner_pair(seed=8)
        position = Point(1000, 2000, -3000)
        solved = SolvedScanner(0, position, Orientation.identity(), a.beacons)
        assert align(solved, b) == Alignment(OFFSET, ROTATION)


class TestCorrespondences:
    def test_candidates_are_the_shared_beacons(self):
        a, b = _scanner_pair(seed=9)
        pairs = PairwiseAligner().find_correspondences(a.beacons, b.beacons)
        assert len(pairs) == 12
        for p, q in pairs:
            assert ROTATION.apply(q) + OFFSET == p

    def test_unrelated_scanners_give_no_candidates(self):
        world = distinct_distance_points(30, seed=10)
        pairs = PairwiseAligner().find_correspondences(world[:15], world[15:])
        assert pairs == []


def test_invalid_min_overlap():
    with pytest.raises(ValueError, match="min_overlap"):
        PairwiseAligner(min_overlap=1)


def _scaled_pair(scale, offset, orientation=ROTATION, seed=11):
    world = [Point(p.x * scale, p.y * scale, p.z * scale) for p in distinct_distance_points(24, seed=seed)]
    a = ScannerReport(0, tuple(world[:17]))
    b = observe(1, world[:12] + world[17:], offset, orientation)
    return a, b


class TestLargeCoordinates:
    def test_offsets_beyond_int64(self):
        offset = Point(12 * 10 ** 18, -(12 * 10 ** 18), 5)
        a, b = _scaled_pair(6 * 10 ** 15, offset)
        assert align(a, b) == Alignment(offset, ROTATION)

    def test_coordinates_beyond_uint64(self):
        offset = Point(10 ** 19, 3, -(10 ** 19))
        a, b = _scaled_pair(10 ** 16, offset, seed=12)
        result = align(a, b)
        assert result == Alignment(offset, ROTATION)
        assert {result.apply(q) for q in b.beacons} >= set(a.beacons[:12])

    def test_coordinates_just_above_int32(self):
        offset = Point(2 ** 31 + 7, -(2 ** 32), 2 ** 31)
        a, b = _scaled_pair(2 ** 22, offset, orientation=MIRROR, seed=13)
        assert align(a, b) == Alignment(offset, MIRROR)

    def test_apply_array_matches_apply(self):
        alignment = Alignment(Point(10 ** 19, -(10 ** 19), 1), ROTATION)
        pts = [Point(2 ** 40, 1, -5), Point(-3, 2 ** 35, 0)]
        mapped = alignment.apply_array(points_to_array(pts))
        assert array_to_points(mapped) == [alignment.apply(p) for p in pts]
