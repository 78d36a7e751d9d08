"""Pure geometry functions: angle arithmetic, segment intersection, ray casting, polygons."""
import math

import numpy as np

from .types import Point, WallSegment

# Determinant below which two segments are treated as parallel.
PARALLEL_EPS = 1e-10

# ============================================================
# Error Type
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

# ============================================================
# Angle Arithmetic (degrees)
# ============================================================
def angle_diff(start: float, end: float) -> float:
    """Angular span from start to end in degrees, in (0, 360].

    A literal difference of zero means a full circle, so 360 is returned
    instead of 0.
    """
    return (end - start + 360) % 360 or 360

def normalize_angle(a: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    return a % 360

def mid_angle(start: float, end: float) -> float:
    """Bisector of the span from start to end, in [0, 360)."""
    return (start + angle_diff(start, end) / 2) % 360

def wrap_signed(a: float) -> float:
    """Wrap an angle difference in degrees into [-180, 180]."""
    if a > 180:
        a -= 360
    if a < -180:
        a += 360
    return a

def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward +inf (pointer angles)."""
    return math.floor(x + 0.5)

def pointer_bearing(center: Point, pointer: Point) -> int:
    """Whole-degree screen bearing of pointer around center, in [0, 360).

    Plan space has y pointing down, so angles grow clockwise on screen.
    """
    deg = math.degrees(math.atan2(pointer[1]-center[1], pointer[0]-center[0]))
    return (round_half_up(deg) + 360) % 360

# ============================================================
# Points and Segments
# ============================================================
def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0]-b[0], a[1]-b[1])

def polar_pt(center: Point, r: float, angle_deg: float) -> Point:
    """Point at distance r from center along angle_deg."""
    rad = math.radians(angle_deg % 360)
    return (center[0]+r*math.cos(rad), center[1]+r*math.sin(rad))

def segment_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> Point | None:
    """Intersection of segment p1-p2 with segment p3-p4, or None.

    Parallel, coincident and zero-length segments never intersect.
    """
    denom = (p4[1]-p3[1])*(p2[0]-p1[0]) - (p4[0]-p3[0])*(p2[1]-p1[1])
    if abs(denom) < PARALLEL_EPS:
        return None
    ua = ((p4[0]-p3[0])*(p1[1]-p3[1]) - (p4[1]-p3[1])*(p1[0]-p3[0])) / denom
    ub = ((p2[0]-p1[0])*(p1[1]-p3[1]) - (p2[1]-p1[1])*(p1[0]-p3[0])) / denom
    if 0 <= ua <= 1 and 0 <= ub <= 1:
        return (p1[0]+ua*(p2[0]-p1[0]), p1[1]+ua*(p2[1]-p1[1]))
    return None

# ============================================================
# Ray Casting
# ============================================================
def cast_rays(
    center: Point, angles_deg, lengths, walls: list[WallSegment],
) -> tuple[list[Point], list[float]]:
    """Cast rays from center and stop each at the nearest wall it crosses.

    Ray i points along angles_deg[i] with signed length lengths[i]. Every
    ray is tested against every wall with the same parametric solve as
    segment_intersect, as one (rays x walls) array operation.

    Returns (endpoints, distances): the nearest wall hit per ray, or the
    unobstructed ray end and its length when nothing is hit.
    """
    cx, cy = center
    rad = np.radians(np.asarray(angles_deg, dtype=float) % 360)
    length = np.asarray(lengths, dtype=float)
    ex = cx + length*np.cos(rad)
    ey = cy + length*np.sin(rad)
    if len(walls) == 0 or len(length) == 0:
        return list(zip(ex.tolist(), ey.tolist())), length.tolist()

    seg = np.array([(w.p1[0], w.p1[1], w.p2[0], w.p2[1]) for w in walls], dtype=float)
    x3, y3, x4, y4 = seg[:, 0][None, :], seg[:, 1][None, :], seg[:, 2][None, :], seg[:, 3][None, :]
    dx = (ex - cx)[:, None]; dy = (ey - cy)[:, None]

    denom = (y4-y3)*dx - (x4-x3)*dy
    ok = np.abs(denom) >= PARALLEL_EPS
    safe = np.where(ok, denom, 1.0)
    ua = ((x4-x3)*(cy-y3) - (y4-y3)*(cx-x3)) / safe
    ub = (dx*(cy-y3) - dy*(cx-x3)) / safe
    ix = cx + ua*dx; iy = cy + ua*dy
    d = np.hypot(ix-cx, iy-cy)
    hit = ok & (ua >= 0) & (ua <= 1) & (ub >= 0) & (ub <= 1) & (d <= np.abs(length)[:, None])
    d = np.where(hit, d, np.inf)

    # argmin keeps the first wall on ties
    rows = np.arange(len(length))
    nearest = np.argmin(d, axis=1)
    best = d[rows, nearest]
    found = np.isfinite(best)
    px = np.where(found, ix[rows, nearest], ex)
    py = np.where(found, iy[rows, nearest], ey)
    dist = np.where(found, best, length)
    return list(zip(px.tolist(), py.tolist())), dist.tolist()

# ============================================================
# Polygon Utilities
# ============================================================
def poly_area(verts: list[Point]) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    n = len(verts); a = 0
    for i in range(n):
        j = (i+1)%n; a += verts[i][0]*verts[j][1]-verts[j][0]*verts[i][1]
    return abs(a)/2

def bbox(points: list[Point]) -> tuple[float, float, float, float]:
    """(xmin, ymin, xmax, ymax) of a point list."""
    if not points:
        raise GeometryError("Bounding box of an empty point list")
    xs = [p[0] for p in points]; ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)
