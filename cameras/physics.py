"""Mounting physics: dead zone and ground range from height, tilt and vertical FOV.

Angles are measured downward from horizontal. The top ray of the view
(tilt - half_fov) sets how far the camera sees along the ground; the bottom
ray (tilt + half_fov) sets where the ground first comes into view.
"""
import math
from typing import NamedTuple

from cameras.constants import INFINITE_RANGE_M, MIN_TAN, MIN_CAMERA_TILT, MAX_CAMERA_TILT
from cameras.config import CoverageConfig, clamp


class PhysicsResult(NamedTuple):
    min_range_m: float   # signed; negative means the bottom ray lands behind the camera
    max_dist_m: float    # INFINITE_RANGE_M when the top ray never reaches the ground


class AppliedPhysics(NamedTuple):
    min_range_m: float   # true signed dead zone, for the side diagram
    radius_m: float      # draw distance after the user range cap


def solve_physics(height: float, tilt: float, half_fov: float) -> PhysicsResult:
    """Forward problem: ground distances reached by the top and bottom rays."""
    top = tilt - half_fov
    max_dist = INFINITE_RANGE_M
    if top > 0:
        max_dist = height / math.tan(math.radians(top))

    t = math.tan(math.radians(tilt + half_fov))
    if abs(t) < MIN_TAN:
        min_range = INFINITE_RANGE_M if t >= 0 else -INFINITE_RANGE_M
    else:
        min_range = height / t
    return PhysicsResult(min_range, max_dist)


def solve_tilt_for_range(height: float, half_fov: float, desired_range: float) -> float:
    """Inverse problem: smallest tilt whose top ray lands at desired_range.

    Clamped to [0, 90]; a non-positive range asks for straight down.
    """
    tilt = half_fov + math.degrees(math.atan2(height, desired_range))
    return clamp(tilt, MIN_CAMERA_TILT, MAX_CAMERA_TILT)


def apply_physics(config: CoverageConfig, pixels_per_meter: float) -> AppliedPhysics:
    """Write physics-derived radius and min_range (pixels) into config.

    When the bottom ray points at or past straight down the drawn dead zone
    is clamped to 0; the returned min_range_m keeps the signed value.
    """
    half_fov = config.physics_fov / 2
    res = solve_physics(config.camera_height, config.camera_tilt, half_fov)

    drawn_min_m = 0.0 if config.camera_tilt + half_fov >= 90 else res.min_range_m
    config.min_range = drawn_min_m * pixels_per_meter

    radius_m = min(res.max_dist_m, config.max_range)
    config.radius = radius_m * pixels_per_meter
    return AppliedPhysics(res.min_range_m, radius_m)
