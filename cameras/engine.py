"""One-call coverage computation for the rendering side."""
from typing import NamedTuple

from shared.types import Point, WallSegment
from cameras.constants import DEFAULT_PIXELS_PER_METER
from cameras.config import CoverageConfig
from cameras.polygon import build_coverage_points
from cameras.dori import DoriZone, compute_dori_zones


class CoverageResult(NamedTuple):
    """Everything needed to draw one camera.

    invalid means nothing should be drawn. When DORI zones are present they
    are drawn in place of the plain polygon.
    """
    points: list[Point]
    invalid: bool
    dori_zones: list[DoriZone]


def compute_coverage(
    center: Point, config: CoverageConfig, walls: list[WallSegment],
    pixels_per_meter: float = DEFAULT_PIXELS_PER_METER, layer_opacity: float = 1.0,
) -> CoverageResult:
    if config.is_invalid:
        return CoverageResult([], True, [])
    points = build_coverage_points(
        center, config.start_angle, config.end_angle,
        config.radius, config.min_range, config.projection_mode, walls,
    )
    zones = compute_dori_zones(center, config, pixels_per_meter, walls, layer_opacity)
    return CoverageResult(points, False, zones)
