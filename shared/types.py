"""Shared type definitions for the camera coverage planner."""
from typing import Literal, NamedTuple

Point = tuple[float, float]

class WallSegment(NamedTuple):
    p1: Point; p2: Point

class PlanPolygon(NamedTuple):
    label: str; points: list[Point]

ProjectionMode = Literal["circular", "rectangular"]
EdgeStyle = Literal["solid", "dashed", "dotted"]
Handle = Literal["left", "right", "rotate"]
