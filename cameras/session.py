"""Coverage session: owns one camera's config, recomputes on every change,
and runs the drag-handle state machine.

States: Idle -> {ResizingStart, ResizingEnd, Rotating} -> Idle. Pointer-down
on a handle enters a drag state, each pointer-move rewrites the angles (and,
when rotating, the radius) and recomputes, pointer-up returns to Idle,
recomputes once more and hands the config to on_commit for persistence.
"""
from typing import Callable, NamedTuple, Optional, Sequence

from shared.types import Point, WallSegment, Handle
from shared.geometry import angle_diff, distance, pointer_bearing, round_half_up
from cameras.constants import (
    DEFAULT_PIXELS_PER_METER, MIN_DISTANCE_M, MAX_DISTANCE_M,
    MIN_SPAN, COLLAPSE_OFFSET, HANDLE_HIT_RADIUS, DEFAULT_SENSOR,
)
from cameras.config import Camera
from cameras.engine import CoverageResult, compute_coverage
from cameras.physics import AppliedPhysics, apply_physics, solve_tilt_for_range
from cameras.polygon import handle_positions
from cameras.lens import apply_lens


# ============================================================
# Interaction states
# ============================================================
class Idle(NamedTuple):
    pass

class ResizingStart(NamedTuple):
    pass

class ResizingEnd(NamedTuple):
    pass

class Rotating(NamedTuple):
    initial_bearing: int
    initial_start: float
    initial_end: float

InteractionState = Idle | ResizingStart | ResizingEnd | Rotating


class CoverageOutput(NamedTuple):
    """One recompute: the coverage result plus where to draw the handles."""
    coverage: CoverageResult
    handles: dict[str, Point]
    physics: Optional[AppliedPhysics]


class CoverageSession:
    """Single-threaded owner of one camera's coverage state.

    walls is a snapshot supplied by the drawing side; it is read, never
    modified. Every setter clamps its input and returns a fresh recompute.
    """

    def __init__(
        self, camera: Camera, walls: Sequence[WallSegment] = (),
        pixels_per_meter: float = DEFAULT_PIXELS_PER_METER,
        on_commit: Optional[Callable[[dict], None]] = None,
        layer_opacity: float = 1.0,
    ):
        self.camera = camera
        self.walls = list(walls)
        self.pixels_per_meter = pixels_per_meter
        self.on_commit = on_commit
        self.layer_opacity = layer_opacity
        self.state: InteractionState = Idle()
        self.physics: Optional[AppliedPhysics] = None
        self.last: Optional[CoverageOutput] = None

    @property
    def config(self):
        return self.camera.config

    # --- recompute pipeline ---

    def recompute(self) -> CoverageOutput:
        cfg = self.config
        cov = compute_coverage(self.camera.center, cfg, self.walls,
                               self.pixels_per_meter, self.layer_opacity)
        cfg.fill(self.layer_opacity)
        self.last = CoverageOutput(cov, handle_positions(self.camera.center, cfg), self.physics)
        return self.last

    def _apply_physics(self) -> CoverageOutput:
        self.physics = apply_physics(self.config, self.pixels_per_meter)
        return self.recompute()

    # --- collaborator inputs ---

    def set_walls(self, walls: Sequence[WallSegment]) -> CoverageOutput:
        self.walls = list(walls)
        return self.recompute()

    def move_camera(self, center: Point) -> CoverageOutput:
        self.camera.center = center
        return self.recompute()

    # --- UI options ---

    def set_angle_span(self, span: float) -> CoverageOutput:
        self.config.set_angle_span(span)
        return self.recompute()

    def set_max_range(self, meters: float, adjust_tilt: bool = False) -> CoverageOutput:
        """Set the draw distance.

        With adjust_tilt the mounting tilt is solved so the top ray lands at
        the requested distance and physics is reapplied; otherwise the
        radius is set directly.
        """
        cfg = self.config
        cfg.set_max_range(meters)
        if adjust_tilt:
            cfg.set_camera_tilt(solve_tilt_for_range(
                cfg.camera_height, cfg.physics_fov / 2, cfg.max_range))
            return self._apply_physics()
        cfg.set_distance(cfg.max_range, self.pixels_per_meter)
        return self.recompute()

    def set_opacity(self, opacity: float) -> CoverageOutput:
        self.config.set_opacity(opacity)
        return self.recompute()

    def set_edge_style(self, style: str) -> CoverageOutput:
        self.config.set_edge_style(style)
        return self.recompute()

    def set_projection_mode(self, mode: str) -> CoverageOutput:
        self.config.set_projection_mode(mode)
        return self.recompute()

    def set_color(self, color: str) -> CoverageOutput:
        self.config.set_color(color)
        return self.recompute()

    def set_visible(self, visible: bool) -> CoverageOutput:
        self.config.visible = visible
        return self.recompute()

    def set_dori_enabled(self, enabled: bool) -> CoverageOutput:
        self.config.dori_enabled = enabled
        return self.recompute()

    def set_resolution(self, resolution: Optional[str]) -> CoverageOutput:
        self.config.resolution = resolution or None
        return self.recompute()

    def set_aspect_ratio_mode(self, enabled: bool) -> CoverageOutput:
        self.config.aspect_ratio_mode = enabled
        return self.recompute()

    def set_lock_distance_on_rotate(self, locked: bool) -> CoverageOutput:
        self.config.lock_distance_on_rotate = locked
        return self.recompute()

    def set_camera_height(self, meters: float) -> CoverageOutput:
        self.config.set_camera_height(meters)
        return self._apply_physics()

    def set_camera_tilt(self, degrees: float) -> CoverageOutput:
        self.config.set_camera_tilt(degrees)
        return self._apply_physics()

    def set_lens(self, focal_length, sensor_size: str = DEFAULT_SENSOR) -> CoverageOutput:
        """New lens: recentre the span and rerun physics with the new side FOV."""
        if apply_lens(self.config, focal_length, sensor_size) is None:
            return self.recompute()
        return self._apply_physics()

    # --- pointer interaction ---

    def handle_at(self, pointer: Point, tolerance: float = HANDLE_HIT_RADIUS) -> Optional[Handle]:
        """Handle under the pointer, nearest first, or None."""
        hits = [
            (distance(pointer, p), name)
            for name, p in handle_positions(self.camera.center, self.config).items()
            if distance(pointer, p) <= tolerance
        ]
        return min(hits)[1] if hits else None

    def pointer_down(self, handle: Handle, pointer: Point) -> InteractionState:
        if handle == "left":
            self.state = ResizingStart()
        elif handle == "right":
            self.state = ResizingEnd()
        elif handle == "rotate":
            cfg = self.config
            self.state = Rotating(pointer_bearing(self.camera.center, pointer),
                                  cfg.start_angle, cfg.end_angle)
        else:
            raise ValueError(f"Unknown handle: {handle!r}")
        return self.state

    def pointer_move(self, pointer: Point) -> Optional[CoverageOutput]:
        """Apply one drag step; None while Idle."""
        state = self.state
        if isinstance(state, Idle):
            return None
        cur = pointer_bearing(self.camera.center, pointer)
        if isinstance(state, Rotating):
            self._rotate(state, cur, distance(pointer, self.camera.center))
        else:
            self._resize(isinstance(state, ResizingStart), cur)
        self.config.is_initialized = True
        return self.recompute()

    def pointer_up(self) -> Optional[CoverageOutput]:
        if isinstance(self.state, Idle):
            return None
        self.state = Idle()
        out = self.recompute()
        if self.on_commit is not None:
            self.on_commit(self.config.to_dict())
        return out

    def _rotate(self, state: Rotating, cur: int, dist: float) -> None:
        cfg = self.config
        delta = (cur - state.initial_bearing + 360) % 360
        cfg.start_angle = round_half_up((state.initial_start + delta) % 360) % 360
        cfg.end_angle = round_half_up((state.initial_end + delta) % 360) % 360
        if not cfg.lock_distance_on_rotate:
            ppm = self.pixels_per_meter
            cfg.radius = max(MIN_DISTANCE_M*ppm, min(dist, MAX_DISTANCE_M*ppm))
            cfg.max_range = cfg.radius / ppm

    def _resize(self, is_left: bool, cur: int) -> None:
        cfg = self.config
        other = cfg.end_angle if is_left else cfg.start_angle
        span = angle_diff(cur, other) if is_left else angle_diff(other, cur)
        if span >= MIN_SPAN:
            if is_left:
                cfg.start_angle = cur
            else:
                cfg.end_angle = cur
        elif angle_diff(cfg.start_angle, cfg.end_angle) > 180:
            # dragged through zero from a wide wedge: collapse into a full circle
            collapsed = (cur + (COLLAPSE_OFFSET if is_left else -COLLAPSE_OFFSET) + 360) % 360
            cfg.start_angle = cfg.end_angle = collapsed
        else:
            nudged = (other + (-MIN_SPAN if is_left else MIN_SPAN) + 360) % 360
            if is_left:
                cfg.start_angle = nudged
            else:
                cfg.end_angle = nudged
