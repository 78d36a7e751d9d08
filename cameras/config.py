"""Per-camera coverage configuration, the camera record, and scene filtering."""
import math
import re
from dataclasses import dataclass, field
from typing import Optional

from shared.types import Point, WallSegment, PlanPolygon, ProjectionMode, EdgeStyle
from shared.geometry import angle_diff, mid_angle
from cameras.constants import (
    DEFAULT_PIXELS_PER_METER, DEFAULT_RADIUS_M, DEFAULT_MAX_RANGE_M,
    DEFAULT_START_ANGLE, DEFAULT_END_ANGLE,
    DEFAULT_FILL_COLOR, DEFAULT_BASE_COLOR, DEFAULT_OPACITY,
    DEFAULT_EDGE_STYLE, DEFAULT_PROJECTION,
    DEFAULT_CAMERA_HEIGHT, DEFAULT_CAMERA_TILT,
    MIN_SPAN, MAX_SPAN, FULL_CIRCLE_SNAP, FULL_CIRCLE_SPAN,
    MIN_DISTANCE_M, MAX_DISTANCE_M,
    MIN_CAMERA_HEIGHT, MAX_CAMERA_HEIGHT, MIN_CAMERA_TILT, MAX_CAMERA_TILT,
    EDGE_DASH,
)

_PROJECTIONS = ("circular", "rectangular")
_EDGE_STYLES = ("solid", "dashed", "dotted")
_RGB_RE = re.compile(r"rgba?\((\d+)\s*,\s*(\d+)\s*,\s*(\d+)", re.I)


class ConfigError(ValueError):
    """Raised when a persisted coverage config cannot be loaded."""


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def base_color_of(color: str) -> str:
    """Strip the alpha from an rgb()/rgba() string; fall back to the default gray."""
    m = _RGB_RE.match(color or "")
    return f"rgb({m[1]}, {m[2]}, {m[3]})" if m else DEFAULT_BASE_COLOR


@dataclass
class CoverageConfig:
    """Mutable coverage settings owned by exactly one camera.

    Angles are screen degrees (clockwise, y down). radius and min_range are
    plan pixels; max_range, camera_height are meters. min_range may be
    negative, which means there is no dead zone.
    """
    start_angle: float = DEFAULT_START_ANGLE
    end_angle: float = DEFAULT_END_ANGLE
    radius: float = DEFAULT_RADIUS_M * DEFAULT_PIXELS_PER_METER
    min_range: float = 0.0
    max_range: float = DEFAULT_MAX_RANGE_M
    projection_mode: ProjectionMode = DEFAULT_PROJECTION
    edge_style: EdgeStyle = DEFAULT_EDGE_STYLE
    camera_height: float = DEFAULT_CAMERA_HEIGHT
    camera_tilt: float = DEFAULT_CAMERA_TILT
    side_fov: Optional[float] = None
    vertical_fov: Optional[float] = None
    calculated_angle: Optional[float] = None
    dori_enabled: bool = False
    aspect_ratio_mode: bool = False
    resolution: Optional[str] = None
    lock_distance_on_rotate: bool = False
    fill_color: str = DEFAULT_FILL_COLOR
    base_color: str = DEFAULT_BASE_COLOR
    opacity: float = DEFAULT_OPACITY
    visible: bool = True
    is_initialized: bool = False

    @classmethod
    def defaults(cls, pixels_per_meter: float = DEFAULT_PIXELS_PER_METER,
                 resolution: Optional[str] = None, **overrides) -> "CoverageConfig":
        """Config for a freshly placed camera device."""
        cfg = cls(**overrides)
        if "radius" not in overrides:
            cfg.radius = DEFAULT_RADIUS_M * pixels_per_meter
        if "max_range" not in overrides:
            cfg.max_range = cfg.radius / pixels_per_meter if cfg.radius else DEFAULT_MAX_RANGE_M
        if "base_color" not in overrides:
            cfg.base_color = base_color_of(cfg.fill_color)
        if resolution is not None:
            cfg.resolution = resolution
            # DORI turns on by itself once a resolution is known
            if "dori_enabled" not in overrides:
                cfg.dori_enabled = True
        cfg.is_initialized = True
        return cfg

    # --- derived values ---

    @property
    def span(self) -> float:
        return angle_diff(self.start_angle, self.end_angle)

    @property
    def is_full_circle(self) -> bool:
        return self.span >= FULL_CIRCLE_SPAN

    @property
    def mid_angle(self) -> float:
        return mid_angle(self.start_angle, self.end_angle)

    @property
    def is_invalid(self) -> bool:
        """Dead zone reaches the draw distance; nothing can be drawn."""
        return self.min_range >= self.radius

    @property
    def physics_fov(self) -> float:
        """Vertical FOV used for mounting physics (falls back to the plan span)."""
        return self.side_fov or self.span

    # --- clamped setters ---

    def set_angle_span(self, span: float) -> None:
        """Resize the wedge around its current mid-angle."""
        span = clamp(span, MIN_SPAN, MAX_SPAN)
        mid = self.mid_angle
        self.start_angle = (mid - span/2 + 360) % 360
        self.end_angle = (mid + span/2) % 360
        if span >= FULL_CIRCLE_SNAP:
            self.start_angle, self.end_angle = 0.0, 360.0
        self.is_initialized = True

    def set_distance(self, meters: float, pixels_per_meter: float) -> None:
        """Set the draw distance directly (no physics)."""
        meters = clamp(meters, MIN_DISTANCE_M, MAX_DISTANCE_M)
        self.radius = meters * pixels_per_meter

    def set_max_range(self, meters: float) -> None:
        self.max_range = clamp(meters, MIN_DISTANCE_M, MAX_DISTANCE_M)

    def set_opacity(self, opacity: float) -> None:
        if opacity is None or math.isnan(opacity):
            opacity = DEFAULT_OPACITY
        self.opacity = clamp(opacity, 0.0, 1.0)

    def set_camera_height(self, meters: float) -> None:
        self.camera_height = clamp(meters, MIN_CAMERA_HEIGHT, MAX_CAMERA_HEIGHT)

    def set_camera_tilt(self, degrees: float) -> None:
        self.camera_tilt = clamp(degrees, MIN_CAMERA_TILT, MAX_CAMERA_TILT)

    def set_projection_mode(self, mode: str) -> None:
        self.projection_mode = _checked(mode, _PROJECTIONS, "projection mode")

    def set_edge_style(self, style: str) -> None:
        self.edge_style = _checked(style, _EDGE_STYLES, "edge style")

    def set_color(self, color: str) -> None:
        self.base_color = base_color_of(color)

    # --- rendering helpers ---

    def fill(self, layer_opacity: float = 1.0) -> str:
        """rgba fill from the base color; also cached on fill_color."""
        m = _RGB_RE.match(self.base_color)
        r, g, b = (m[1], m[2], m[3]) if m else (165, 155, 155)
        self.fill_color = f"rgba({r}, {g}, {b}, {self.opacity * layer_opacity})"
        return self.fill_color

    def dash_array(self) -> Optional[list[int]]:
        return EDGE_DASH.get(self.edge_style)

    # --- persistence ---

    def to_dict(self) -> dict:
        """Opaque serialisation for the project save collaborator."""
        return {_CAMEL[k]: v for k, v in self.__dict__.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "CoverageConfig":
        unknown = set(data) - set(_SNAKE)
        if unknown:
            raise ConfigError(f"Unknown coverage keys: {sorted(unknown)}")
        cfg = cls(**{_SNAKE[k]: v for k, v in data.items()})
        _checked(cfg.projection_mode, _PROJECTIONS, "projection mode")
        _checked(cfg.edge_style, _EDGE_STYLES, "edge style")
        return cfg


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(w.capitalize() for w in rest)

_CAMEL = {f: _camel(f) for f in CoverageConfig.__dataclass_fields__}
_CAMEL["side_fov"] = "sideFOV"
_CAMEL["vertical_fov"] = "verticalFOV"
_SNAKE = {v: k for k, v in _CAMEL.items()}


def _checked(value: str, allowed: tuple[str, ...], what: str) -> str:
    if value not in allowed:
        raise ConfigError(f"Unknown {what}: {value!r} (expected one of {', '.join(allowed)})")
    return value


@dataclass
class Camera:
    """A placed camera device. center moves freely; config persists."""
    center: Point
    config: CoverageConfig = field(default_factory=CoverageConfig.defaults)
    name: str = "Camera"


SceneObject = WallSegment | Camera | PlanPolygon


def walls_in_scene(objects: list[SceneObject]) -> list[WallSegment]:
    """Wall segments of a mixed scene, in scene order."""
    return [o for o in objects if isinstance(o, WallSegment)]


def cameras_in_scene(objects: list[SceneObject]) -> list[Camera]:
    return [o for o in objects if isinstance(o, Camera)]
