"""SVG transform factory and page constants."""
import os, subprocess
from typing import Callable
from .types import Point
from .geometry import bbox

# Optional cache so every SVG from one run embeds the same git describe.
_GIT_DESCRIBE_CACHE = os.path.join(os.path.dirname(__file__), os.pardir, ".git_describe")


def git_describe() -> str:
    """Return git describe string, preferring a cached value."""
    try:
        with open(_GIT_DESCRIBE_CACHE) as f:
            return f.read().strip()
    except FileNotFoundError:
        return subprocess.check_output(
            ["git", "describe", "--always", "--dirty=-DEV"], text=True
        ).strip()

# US Letter landscape at 72 dpi (11" x 8.5")
W, H = 792, 612

def make_svg_transform(
    points: list[Point], margin: float = 54, right_reserve: float = 150,
) -> tuple[Callable[[float, float], tuple[float, float]], float]:
    """Create a to_svg closure fitting the plan points onto the page.

    Plan space already has y pointing down, so only a uniform scale and an
    offset are applied. right_reserve keeps a strip free for the title block.
    Returns (to_svg, scale) where scale is SVG points per plan pixel.
    """
    xmin, ymin, xmax, ymax = bbox(points)
    avail_w = W - 2*margin - right_reserve
    avail_h = H - 2*margin
    s = min(avail_w / max(xmax-xmin, 1e-9), avail_h / max(ymax-ymin, 1e-9))
    ox = margin - xmin*s
    oy = margin + (avail_h - (ymax-ymin)*s) / 2 - ymin*s
    def to_svg(x: float, y: float) -> tuple[float, float]:
        return (ox + x*s, oy + y*s)
    return to_svg, s
