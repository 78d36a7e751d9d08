"""Tests for shared/geometry.py pure functions."""
import math
import pytest
from shared.geometry import (
    GeometryError,
    angle_diff, normalize_angle, mid_angle, wrap_signed, round_half_up, pointer_bearing,
    distance, polar_pt, segment_intersect, cast_rays,
    poly_area, bbox,
)
from shared.types import WallSegment


# --- angle_diff ---

def test_angle_diff_simple():
    assert angle_diff(0, 90) == 90


def test_angle_diff_wraps_through_zero():
    assert angle_diff(270, 0) == 90
    assert angle_diff(350, 10) == 20
    assert angle_diff(0, 270) == 270


def test_angle_diff_zero_is_full_circle():
    assert angle_diff(45, 45) == 360
    assert angle_diff(0, 360) == 360


@pytest.mark.parametrize("start,end", [(0, 1), (359, 0), (10, 9), (123.5, 7.25)])
def test_angle_diff_in_range(start, end):
    assert 0 < angle_diff(start, end) <= 360


# --- mid / normalize / wrap ---

def test_mid_angle_across_zero():
    assert abs(mid_angle(350, 10) - 0) < 1e-10


def test_normalize_angle_negative():
    assert abs(normalize_angle(-90) - 270) < 1e-10


def test_wrap_signed():
    assert wrap_signed(270) == -90
    assert wrap_signed(-270) == 90
    assert wrap_signed(45) == 45


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.49) == 0


# --- pointer_bearing ---

def test_pointer_bearing_screen_axes():
    # y points down, so "below" the center is 90 degrees
    assert pointer_bearing((0, 0), (10, 0)) == 0
    assert pointer_bearing((0, 0), (0, 10)) == 90
    assert pointer_bearing((0, 0), (-10, 0)) == 180
    assert pointer_bearing((0, 0), (0, -10)) == 270


def test_pointer_bearing_rounds_to_whole_degree():
    b = pointer_bearing((0, 0), (100, 1))   # ~0.57 deg
    assert b == 1


# --- distance / polar_pt ---

def test_distance():
    assert abs(distance((0, 0), (3, 4)) - 5.0) < 1e-12


def test_polar_pt():
    p = polar_pt((1, 1), 2.0, 90)
    assert abs(p[0] - 1.0) < 1e-10
    assert abs(p[1] - 3.0) < 1e-10


# --- segment_intersect ---

def test_segment_intersect_cross():
    p = segment_intersect((0, 0), (10, 0), (5, -5), (5, 5))
    assert abs(p[0] - 5.0) < 1e-10
    assert abs(p[1] - 0.0) < 1e-10


def test_segment_intersect_parallel_is_none():
    assert segment_intersect((0, 0), (10, 0), (0, 1), (10, 1)) is None


def test_segment_intersect_collinear_is_none():
    assert segment_intersect((0, 0), (10, 0), (2, 0), (8, 0)) is None


def test_segment_intersect_zero_length_is_none():
    assert segment_intersect((0, 0), (10, 0), (5, 0), (5, 0)) is None


def test_segment_intersect_misses_beyond_end():
    assert segment_intersect((0, 0), (4, 0), (5, -5), (5, 5)) is None


def test_segment_intersect_touching_endpoint():
    p = segment_intersect((0, 0), (5, 0), (5, -5), (5, 5))
    assert abs(p[0] - 5.0) < 1e-10


# --- cast_rays ---

def test_cast_rays_no_walls():
    pts, d = cast_rays((0, 0), [0, 90], [10, 10], [])
    assert abs(pts[0][0] - 10) < 1e-10 and abs(pts[0][1]) < 1e-10
    assert abs(pts[1][1] - 10) < 1e-10
    assert d == [10.0, 10.0]


def test_cast_rays_stops_at_nearest_wall():
    walls = [WallSegment((8, -5), (8, 5)), WallSegment((3, -5), (3, 5))]
    pts, d = cast_rays((0, 0), [0], [10], walls)
    assert abs(pts[0][0] - 3.0) < 1e-10
    assert abs(d[0] - 3.0) < 1e-10


def test_cast_rays_wall_beyond_length_ignored():
    pts, d = cast_rays((0, 0), [0], [10], [WallSegment((20, -5), (20, 5))])
    assert abs(pts[0][0] - 10.0) < 1e-10
    assert abs(d[0] - 10.0) < 1e-10


def test_cast_rays_matches_segment_intersect():
    walls = [WallSegment((5, -10), (12, 10)), WallSegment((-4, 3), (6, 9))]
    angles = [i * 15 for i in range(24)]
    pts, _ = cast_rays((0, 0), angles, [20] * 24, walls)
    for a, p in zip(angles, pts):
        end = polar_pt((0, 0), 20, a)
        hits = [h for h in (segment_intersect((0, 0), end, w.p1, w.p2) for w in walls) if h]
        expect = min(hits, key=lambda h: distance((0, 0), h)) if hits else end
        assert abs(p[0] - expect[0]) < 1e-9
        assert abs(p[1] - expect[1]) < 1e-9


def test_cast_rays_negative_length_keeps_sign():
    _, d = cast_rays((0, 0), [0], [-5], [])
    assert d == [-5.0]


# --- poly_area ---

def test_poly_area_unit_square():
    sq = [(0, 0), (1, 0), (1, 1), (0, 1)]
    assert abs(poly_area(sq) - 1.0) < 1e-12


def test_poly_area_triangle():
    tri = [(0, 0), (4, 0), (0, 3)]
    assert abs(poly_area(tri) - 6.0) < 1e-12


# --- bbox ---

def test_bbox():
    assert bbox([(1, 5), (-2, 3), (4, -1)]) == (-2, -1, 4, 5)


def test_bbox_empty_raises():
    with pytest.raises(GeometryError, match="empty"):
        bbox([])
