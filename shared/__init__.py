"""Shared types, geometry, ray casting, and SVG utilities."""

from .types import Point, WallSegment, PlanPolygon, ProjectionMode, EdgeStyle, Handle
from .geometry import (
    GeometryError, PARALLEL_EPS,
    angle_diff, normalize_angle, mid_angle, wrap_signed, round_half_up, pointer_bearing,
    distance, polar_pt, segment_intersect, cast_rays,
    poly_area, bbox,
)
from .svg import make_svg_transform, W, H
