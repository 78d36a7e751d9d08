"""Coverage polygon construction: ray fan, wall occlusion, dead-zone wedge.

The outer boundary is a fan of rays from the camera center, each cut short
at the nearest wall. Unless the camera sees a full circle, the polygon is
closed either straight back to the center or along an inner dead-zone arc
walked in reverse, which never extends past the wall hit of its ray.
"""
import math

from shared.types import Point, WallSegment, ProjectionMode
from shared.geometry import angle_diff, wrap_signed, polar_pt, cast_rays
from cameras.constants import (
    FULL_CIRCLE_SPAN, FULL_CIRCLE_RAYS, MIN_RAYS,
    RECT_MAX_SPAN, RECT_MAX_OFFSET_RAD, RECT_MIN_COS, RECT_MIN_RADIUS,
    MIN_DEAD_ZONE, HANDLE_OFFSET,
)
from cameras.config import CoverageConfig


def ray_count(span: float) -> int:
    if span >= FULL_CIRCLE_SPAN:
        return max(FULL_CIRCLE_RAYS, MIN_RAYS)
    return max(math.ceil(span / 2), MIN_RAYS)


def rect_radius(
    radius: float, angle: float, mid: float,
    max_offset_rad: float = RECT_MAX_OFFSET_RAD, min_cos: float = RECT_MIN_COS,
) -> float:
    """Distance along a ray at angle to a flat image plane radius away at mid.

    Rays more than max_offset_rad off the mid-angle, or whose cosine falls
    to min_cos, keep the plain radius.
    """
    off = math.radians(angle - mid)
    if abs(off) < max_offset_rad:
        c = math.cos(off)
        if abs(c) > min_cos:
            return radius / c
    return radius


def build_coverage_points(
    center: Point, start_angle: float, end_angle: float,
    radius: float, min_range: float, projection_mode: ProjectionMode,
    walls: list[WallSegment],
    max_offset_rad: float = RECT_MAX_OFFSET_RAD, min_cos: float = RECT_MIN_COS,
) -> list[Point]:
    """Ordered boundary of the wall-clipped coverage area.

    Outer arc from start_angle to end_angle, then (partial spans only) the
    dead-zone arc from end back to start, or the center when there is no
    dead zone. Callers check min_range < radius first.
    """
    span = angle_diff(start_angle, end_angle)
    full = span >= FULL_CIRCLE_SPAN
    n = ray_count(span)
    step = (360 if full else span) / n
    base = 0 if full else start_angle
    # Not wrapped: angle - mid must stay a small signed offset
    mid = start_angle + span/2
    rect = projection_mode == "rectangular" and span < RECT_MAX_SPAN

    angles = [base + i*step for i in range(n + 1)]
    lengths = [
        rect_radius(radius, a, mid, max_offset_rad, min_cos)
        if rect and not full and abs(radius) > RECT_MIN_RADIUS else radius
        for a in angles
    ]
    points, ray_dist = cast_rays(center, angles, lengths, walls)

    if full:
        return points

    if min_range <= 0 or abs(min_range) < MIN_DEAD_ZONE:
        points.append(center)
        return points

    for i in range(n, -1, -1):
        r = rect_radius(min_range, angles[i], mid, max_offset_rad, min_cos) if rect else min_range
        # the dead zone stops where the outer ray hit a wall
        if r > 0 and r > ray_dist[i]:
            r = ray_dist[i]
        points.append(polar_pt(center, r, angles[i]))
    return points


# ============================================================
# Drag Handles
# ============================================================
def handle_angles(config: CoverageConfig) -> dict[str, float]:
    """Bearings of the left, right and rotate handles in degrees."""
    start, span = config.start_angle, config.span
    spread = span >= FULL_CIRCLE_SPAN or span <= HANDLE_OFFSET
    return {
        "left": (start - HANDLE_OFFSET + 360) % 360 if spread else start,
        "right": (start + HANDLE_OFFSET) % 360 if spread else config.end_angle,
        "rotate": (start + span/2) % 360,
    }


def handle_positions(center: Point, config: CoverageConfig) -> dict[str, Point]:
    """Plan positions of the three drag handles at the coverage edge."""
    span = config.span
    mid = config.start_angle + span/2
    out = {}
    for name, a in handle_angles(config).items():
        r = config.radius
        if config.projection_mode == "rectangular" and span < RECT_MAX_SPAN:
            r = rect_radius(r, mid + wrap_signed(a % 360 - mid), mid)
        out[name] = polar_pt(center, r, a)
    return out
