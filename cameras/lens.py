"""Field of view from lens focal length and sensor format."""
import math
from typing import NamedTuple, Optional

from shared.geometry import round_half_up
from cameras.constants import SENSOR_DIMENSIONS, DEFAULT_SENSOR, FULL_CIRCLE_SNAP
from cameras.config import CoverageConfig


class LensFov(NamedTuple):
    horizontal: float   # deg
    vertical: float     # deg


class LensAngles(NamedTuple):
    plan_angle: int        # deg, drawn span on the plan
    side_angle: float      # deg, vertical FOV for mounting physics
    vertical_fov: float
    horizontal_fov: float


def parse_focal_length(focal_length) -> Optional[float]:
    """Focal length in mm from a number or a string like "2.8mm"."""
    try:
        f = float(str(focal_length).replace("mm", "").strip())
    except ValueError:
        return None
    return f if f > 0 else None


def calculate_fov(focal_length, sensor_size: str) -> Optional[LensFov]:
    """Pinhole FOV: 2 * atan(sensor / (2 * focal)) on each axis."""
    f = parse_focal_length(focal_length)
    sensor = SENSOR_DIMENSIONS.get(sensor_size)
    if f is None or sensor is None:
        return None
    w, h = sensor
    return LensFov(
        math.degrees(2 * math.atan(w / (2 * f))),
        math.degrees(2 * math.atan(h / (2 * f))),
    )


def calculate_camera_angles(focal_length, sensor_size: str,
                            aspect_ratio_mode: bool = False) -> Optional[LensAngles]:
    """Plan and side angles. Corridor mode rotates the sensor 90 degrees."""
    fov = calculate_fov(focal_length, sensor_size)
    if fov is None:
        return None
    if aspect_ratio_mode:
        plan, side = round_half_up(fov.vertical), fov.horizontal
    else:
        plan, side = round_half_up(fov.horizontal), fov.vertical
    return LensAngles(plan, side, fov.vertical, fov.horizontal)


def apply_lens(config: CoverageConfig, focal_length,
               sensor_size: str = DEFAULT_SENSOR) -> Optional[int]:
    """Recentre the wedge on the lens plan angle and store the side FOV.

    Returns the plan angle, or None (config untouched) for an unusable lens.
    """
    angles = calculate_camera_angles(focal_length, sensor_size, config.aspect_ratio_mode)
    if angles is None:
        return None
    config.side_fov = angles.side_angle
    config.vertical_fov = angles.vertical_fov
    config.calculated_angle = angles.plan_angle

    mid = config.mid_angle
    config.start_angle = (mid - angles.plan_angle/2 + 360) % 360
    config.end_angle = (mid + angles.plan_angle/2) % 360
    if angles.plan_angle >= FULL_CIRCLE_SNAP:
        config.start_angle, config.end_angle = 0.0, 360.0
    config.is_initialized = True
    return angles.plan_angle
