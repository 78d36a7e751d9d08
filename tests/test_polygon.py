"""Tests for cameras/polygon.py coverage polygon construction and handles."""
import math
import pytest
from shared.types import WallSegment
from shared.geometry import distance
from cameras.config import CoverageConfig
from cameras.polygon import (
    ray_count, rect_radius, build_coverage_points, handle_angles, handle_positions,
)

C = (0.0, 0.0)


# --- ray_count ---

class TestRayCount:
    def test_minimum_rays(self):
        assert ray_count(10) == 20

    def test_two_degrees_per_ray(self):
        assert ray_count(90) == 45
        assert ray_count(41) == 21

    def test_full_circle(self):
        assert ray_count(360) == 180


# --- rect_radius ---

class TestRectRadius:
    def test_mid_angle_is_plain_radius(self):
        assert abs(rect_radius(100, 30, 30) - 100) < 1e-10

    def test_stretches_off_axis(self):
        assert abs(rect_radius(100, 60, 0) - 200) < 1e-9

    def test_far_off_axis_falls_back(self):
        # 85 deg is past the 1.4 rad cutoff
        assert rect_radius(100, 85, 0) == 100

    @pytest.mark.parametrize("off", [-80, -79.9, -45, 45, 79.9, 80])
    def test_finite_near_cutoff(self, off):
        r = rect_radius(100, off, 0)
        assert math.isfinite(r)
        assert r >= 100


# --- build_coverage_points ---

@pytest.fixture(scope="module")
def pts():
    return build_coverage_points(C, 0, 90, 100, 0, "circular", [])


class TestCircularNoWalls:
    def test_point_count(self, pts):
        # 46 outer points plus the center
        assert len(pts) == 47

    def test_closes_at_center(self, pts):
        assert pts[-1] == C

    def test_outer_arc_at_radius(self, pts):
        for p in pts[:-1]:
            assert abs(distance(C, p) - 100) < 1e-9

    def test_outer_arc_endpoints(self, pts):
        assert abs(pts[0][0] - 100) < 1e-9 and abs(pts[0][1]) < 1e-9
        assert abs(pts[45][0]) < 1e-9 and abs(pts[45][1] - 100) < 1e-9


class TestWallOcclusion:
    def test_wall_clips_outer_arc(self, east_wall):
        pts = build_coverage_points(C, 0, 90, 100, 0, "circular", east_wall)
        assert abs(pts[0][0] - 50) < 1e-9
        for p in pts:
            assert p[0] <= 50 + 1e-9

    def test_crossing_wall_shortens_ray(self):
        wall = [WallSegment((30, 20), (30, 40))]
        pts = build_coverage_points(C, 0, 90, 100, 0, "circular", wall)
        clipped = [p for p in pts[:-1] if distance(C, p) < 100 - 1e-9]
        assert clipped
        for p in clipped:
            assert abs(p[0] - 30) < 1e-9

    def test_parallel_wall_ignored(self):
        wall = [WallSegment((10, 0), (200, 0))]
        pts = build_coverage_points(C, 0, 90, 100, 0, "circular", wall)
        assert abs(distance(C, pts[0]) - 100) < 1e-9

    def test_full_circle_in_room(self, room):
        pts = build_coverage_points((10, 5), 0, 360, 100, 0, "circular", room)
        assert len(pts) == 181
        for x, y in pts:
            on_wall = (abs(x) < 1e-9 or abs(x - 20) < 1e-9
                       or abs(y) < 1e-9 or abs(y - 10) < 1e-9)
            assert on_wall


class TestDeadZone:
    def test_inner_arc_reversed(self):
        pts = build_coverage_points(C, 0, 90, 100, 20, "circular", [])
        assert len(pts) == 92
        for p in pts[46:]:
            assert abs(distance(C, p) - 20) < 1e-9
        # inner arc walks end to start
        assert abs(pts[46][1] - 20) < 1e-9
        assert abs(pts[-1][0] - 20) < 1e-9

    def test_inner_arc_clamped_to_wall_hit(self):
        wall = [WallSegment((10, -100), (10, 100))]
        pts = build_coverage_points(C, 0, 90, 100, 20, "circular", wall)
        assert abs(pts[-1][0] - 10) < 1e-9
        assert abs(pts[-1][1]) < 1e-9

    def test_negative_dead_zone_closes_at_center(self):
        pts = build_coverage_points(C, 0, 90, 100, -15, "circular", [])
        assert pts[-1] == C
        assert len(pts) == 47

    def test_tiny_dead_zone_closes_at_center(self):
        pts = build_coverage_points(C, 0, 90, 100, 0.05, "circular", [])
        assert pts[-1] == C

    def test_full_circle_has_no_inner_boundary(self):
        pts = build_coverage_points(C, 0, 360, 100, 20, "circular", [])
        assert len(pts) == 181
        for p in pts:
            assert abs(distance(C, p) - 100) < 1e-9


class TestRectangular:
    def test_flat_image_plane(self):
        pts = build_coverage_points(C, 315, 45, 100, 0, "rectangular", [])
        for p in pts[:-1]:
            assert abs(p[0] - 100) < 1e-9

    def test_mid_angle_at_radius(self):
        # 80 deg span: 40 rays, ray 20 lies on the mid-angle
        pts = build_coverage_points(C, 320, 40, 100, 0, "rectangular", [])
        mid = pts[20]
        assert abs(distance(C, mid) - 100) < 1e-9

    def test_wide_span_stays_circular(self):
        pts = build_coverage_points(C, 0, 180, 100, 0, "rectangular", [])
        for p in pts[:-1]:
            assert abs(distance(C, p) - 100) < 1e-9

    def test_no_nan_near_cutoff(self):
        pts = build_coverage_points(C, 0, 169, 100, 10, "rectangular", [])
        for x, y in pts:
            assert math.isfinite(x) and math.isfinite(y)


# --- handles ---

class TestHandles:
    def test_angles_follow_wedge(self, config):
        a = handle_angles(config)
        assert a == {"left": 0, "right": 90, "rotate": 45}

    def test_full_circle_spreads_handles(self):
        cfg = CoverageConfig(start_angle=0, end_angle=360)
        a = handle_angles(cfg)
        assert a["left"] == 355
        assert a["right"] == 5
        assert a["rotate"] == 180

    def test_tiny_span_spreads_handles(self):
        cfg = CoverageConfig(start_angle=10, end_angle=13)
        a = handle_angles(cfg)
        assert (a["left"], a["right"]) == (5, 15)

    def test_positions_on_radius(self, config):
        pos = handle_positions(C, config)
        assert abs(pos["left"][0] - 100) < 1e-9
        assert abs(pos["right"][1] - 100) < 1e-9
        assert abs(distance(C, pos["rotate"]) - 100) < 1e-9

    def test_positions_rectangular_on_image_plane(self):
        cfg = CoverageConfig(start_angle=315, end_angle=45, radius=100,
                             projection_mode="rectangular")
        pos = handle_positions(C, cfg)
        for p in pos.values():
            assert abs(p[0] - 100) < 1e-9
