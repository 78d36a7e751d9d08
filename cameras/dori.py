"""DORI zones (IEC 62676-4): Detection, Observation, Recognition, Identification.

Each level needs a minimum pixel density on target. With W horizontal pixels
spread over a horizontal FOV, the density at distance D is
W / (2 * D * tan(FOV/2)), so the farthest distance meeting a level is
D = W / (2 * ppm * tan(FOV/2)).
"""
import math
import re
from typing import NamedTuple, Optional, Sequence

from shared.types import Point, WallSegment
from shared.geometry import angle_diff
from cameras.constants import (
    DORI_PPM, DORI_COLORS, DEFAULT_RESOLUTION_WIDTH,
    MIN_TAN_HALF_FOV, MIN_ZONE_RADIUS_M,
)
from cameras.config import CoverageConfig
from cameras.polygon import build_coverage_points

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+))")


class DoriDistances(NamedTuple):
    """Farthest distance (m) meeting each DORI level."""
    detection: float
    observation: float
    recognition: float
    identification: float


class DoriZone(NamedTuple):
    name: str
    distance_m: float       # unclipped DORI distance
    color: str              # rgba fill
    points: list[Point]


def parse_resolution_width(resolution: Optional[str], aspect_ratio_mode: bool = False) -> Optional[float]:
    """Horizontal pixel count from "WxH" or "<n>MP".

    In aspect-ratio (corridor) mode the sensor is turned on its side, so the
    horizontal count is the smaller dimension. Unparseable strings fall back
    to DEFAULT_RESOLUTION_WIDTH; a missing resolution gives None.
    """
    if not resolution:
        return None
    res = resolution.lower()
    if "x" in res:
        a, b = res.split("x")[:2]
        ma, mb = _LEADING_INT.match(a), _LEADING_INT.match(b)
        if ma and mb:
            w, h = int(ma[1]), int(mb[1])
            return float(min(w, h) if aspect_ratio_mode else max(w, h))
    elif "mp" in res:
        m = _LEADING_FLOAT.match(res)
        if m:
            ratio = 9/16 if aspect_ratio_mode else 16/9
            return math.sqrt(float(m[1]) * 1e6 * ratio)
    return float(DEFAULT_RESOLUTION_WIDTH)


def calculate_dori_distances(
    resolution: Optional[str], span: float, aspect_ratio_mode: bool = False,
) -> Optional[DoriDistances]:
    """DORI distances for a resolution spread across span degrees, or None."""
    width = parse_resolution_width(resolution, aspect_ratio_mode)
    if width is None:
        return None
    tan_half = math.tan(math.radians(span) / 2)
    if tan_half <= MIN_TAN_HALF_FOV:
        return None
    return DoriDistances(*(width / (2 * DORI_PPM[k] * tan_half) for k in DoriDistances._fields))


def compute_dori_zones(
    center: Point, config: CoverageConfig, pixels_per_meter: float,
    walls: Sequence[WallSegment] = (), layer_opacity: float = 1.0,
) -> list[DoriZone]:
    """Wall-clipped DORI polygons, farthest first so nearer zones draw on top.

    Each zone is capped at the current draw distance. Zones that end up
    shorter than MIN_ZONE_RADIUS_M or inside the dead zone are dropped.
    """
    if not config.dori_enabled:
        return []
    dist = calculate_dori_distances(
        config.resolution, angle_diff(config.start_angle, config.end_angle),
        config.aspect_ratio_mode,
    )
    if dist is None:
        return []

    max_range_m = config.radius / pixels_per_meter
    alpha = config.opacity * layer_opacity
    zones = []
    for name, d in sorted(dist._asdict().items(), key=lambda kv: -kv[1]):
        r_m = min(d, max_range_m)
        if r_m <= MIN_ZONE_RADIUS_M:
            continue
        r_px = r_m * pixels_per_meter
        if r_px <= config.min_range:
            continue
        pts = build_coverage_points(
            center, config.start_angle, config.end_angle,
            r_px, config.min_range, config.projection_mode, walls,
        )
        r, g, b = DORI_COLORS[name]
        zones.append(DoriZone(name, d, f"rgba({r}, {g}, {b}, {alpha})", pts))
    return zones
