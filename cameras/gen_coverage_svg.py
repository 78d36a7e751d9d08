"""Generate a camera coverage SVG for a small demo plan.

Walls are red lines, each camera draws its wall-clipped coverage polygon
(or its DORI zones when a resolution is set), plus the three drag handles.
"""
import os, datetime

from shared.types import WallSegment
from shared.geometry import poly_area
from shared.svg import make_svg_transform, W, H, git_describe
from cameras.constants import DEFAULT_PIXELS_PER_METER
from cameras.config import (
    Camera, CoverageConfig, SceneObject, walls_in_scene, cameras_in_scene,
)
from cameras.engine import compute_coverage
from cameras.physics import apply_physics
from cameras.polygon import handle_positions
from cameras.dori import calculate_dori_distances

# ============================================================
# Demo scene
# ============================================================

def build_demo_scene(ppm: float = DEFAULT_PIXELS_PER_METER) -> list[SceneObject]:
    """Two rooms joined by a doorway, with three cameras."""
    def m(x, y):
        return (x*ppm, y*ppm)
    walls = [
        WallSegment(m(0, 0), m(20, 0)),
        WallSegment(m(20, 0), m(20, 12)),
        WallSegment(m(20, 12), m(0, 12)),
        WallSegment(m(0, 12), m(0, 0)),
        # partition with a 2 m doorway
        WallSegment(m(11, 0), m(11, 5)),
        WallSegment(m(11, 7), m(11, 12)),
        # free-standing shelf
        WallSegment(m(4, 8), m(7, 8)),
    ]
    lobby = Camera(m(1, 1), CoverageConfig.defaults(
        ppm, start_angle=0, end_angle=90, radius=14*ppm), "Lobby")
    dome = Camera(m(15.5, 6), CoverageConfig.defaults(
        ppm, start_angle=0, end_angle=360, radius=6*ppm), "Dome")
    hall = Camera(m(19, 11), CoverageConfig.defaults(
        ppm, "1920x1080", start_angle=150, end_angle=240, radius=25*ppm,
        projection_mode="rectangular", edge_style="dashed"), "Hall")
    apply_physics(hall.config, ppm)
    return walls + [lobby, dome, hall]


# ============================================================
# SVG rendering
# ============================================================

def _pts_attr(points, to_svg):
    return " ".join(f"{to_svg(*p)[0]:.1f},{to_svg(*p)[1]:.1f}" for p in points)


def render_coverage_svg(scene: list[SceneObject], ppm: float = DEFAULT_PIXELS_PER_METER,
                        layer_opacity: float = 1.0, stamp: str = None):
    """Render the scene; returns (svg_text, {camera name: CoverageResult})."""
    walls = walls_in_scene(scene)
    cameras = cameras_in_scene(scene)
    extent = [p for w in walls for p in w] + [c.center for c in cameras]
    to_svg, scale = make_svg_transform(extent)

    out = []
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{W}" height="{H}" viewBox="0 0 {W} {H}">')
    out.append(f'<rect width="{W}" height="{H}" fill="white"/>')

    results = {}
    for cam in cameras:
        cfg = cam.config
        res = compute_coverage(cam.center, cfg, walls, ppm, layer_opacity)
        results[cam.name] = res
        if res.invalid or not cfg.visible:
            continue
        dash = cfg.dash_array()
        dash_attr = f' stroke-dasharray="{",".join(str(d) for d in dash)}"' if dash else ""
        if res.dori_zones:
            for z in res.dori_zones:
                out.append(f'<polygon points="{_pts_attr(z.points, to_svg)}" fill="{z.color}" stroke="none"/>')
            out.append(f'<polygon points="{_pts_attr(res.points, to_svg)}" fill="none"'
                       f' stroke="{cfg.base_color}" stroke-width="1"{dash_attr}/>')
        else:
            out.append(f'<polygon points="{_pts_attr(res.points, to_svg)}" fill="{cfg.fill(layer_opacity)}"'
                       f' stroke="{cfg.base_color}" stroke-width="1"{dash_attr}/>')

    for w in walls:
        x1, y1 = to_svg(*w.p1); x2, y2 = to_svg(*w.p2)
        out.append(f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}"'
                   f' stroke="red" stroke-width="2" stroke-linecap="round"/>')

    for cam in cameras:
        cx, cy = to_svg(*cam.center)
        out.append(f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="4" fill="#333"/>')
        out.append(f'<text x="{cx+6:.1f}" y="{cy-6:.1f}" font-family="Arial" font-size="9"'
                   f' font-weight="bold" fill="#333">{cam.name}</text>')
        if results[cam.name].invalid:
            continue
        for name, p in handle_positions(cam.center, cam.config).items():
            hx, hy = to_svg(*p)
            color = "#2a7" if name == "rotate" else "#27a"
            out.append(f'<circle cx="{hx:.1f}" cy="{hy:.1f}" r="3" fill="white" stroke="{color}" stroke-width="1.2"/>')

    # Title block
    tb_w, tb_h = 130, 60
    tb_left, tb_top = W - 54 - tb_w, H - 54 - tb_h
    tb_cx = tb_left + tb_w/2
    out.append(f'<rect x="{tb_left:.1f}" y="{tb_top:.1f}" width="{tb_w}" height="{tb_h}"'
               f' fill="white" stroke="#333" stroke-width="1"/>')
    out.append(f'<text x="{tb_cx:.1f}" y="{tb_top+14:.1f}" text-anchor="middle"'
               f' font-family="Arial" font-size="11" font-weight="bold" fill="#333">Camera coverage</text>')
    out.append(f'<text x="{tb_cx:.1f}" y="{tb_top+27:.1f}" text-anchor="middle"'
               f' font-family="Arial" font-size="8" fill="#666">{ppm:g} px/m, {len(cameras)} cameras</text>')
    _now = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    _stamp = stamp if stamp is not None else git_describe()
    out.append(f'<text x="{tb_cx:.1f}" y="{tb_top+41:.1f}" text-anchor="middle"'
               f' font-family="Arial" font-size="7.5" fill="#999">Generated {_now}</text>')
    out.append(f'<text x="{tb_cx:.1f}" y="{tb_top+51:.1f}" text-anchor="middle"'
               f' font-family="Arial" font-size="7.5" fill="#999">from {_stamp}</text>')

    out.append('</svg>')
    return "\n".join(out), results


# ============================================================
# Main entry point
# ============================================================

if __name__ == "__main__":
    ppm = DEFAULT_PIXELS_PER_METER
    scene = build_demo_scene(ppm)
    svg_content, results = render_coverage_svg(scene, ppm)

    svg_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "coverage.svg")
    with open(svg_path, "w") as f:
        f.write(svg_content)

    print(f"Coverage written to {svg_path}")
    for cam in cameras_in_scene(scene):
        cfg = cam.config; res = results[cam.name]
        if res.invalid:
            print(f"  {cam.name:<6s} invalid (dead zone {cfg.min_range/ppm:.1f} m >= range)")
            continue
        area = abs(poly_area(res.points)) / ppm**2
        print(f"  {cam.name:<6s} span {cfg.span:5.1f} deg  range {cfg.radius/ppm:6.2f} m"
              f"  dead zone {max(cfg.min_range, 0)/ppm:5.2f} m  area {area:7.2f} m^2")
        dist = calculate_dori_distances(cfg.resolution, cfg.span, cfg.aspect_ratio_mode)
        if cfg.dori_enabled and dist is not None:
            for name, d in dist._asdict().items():
                print(f"         {name:<15s} {d:7.2f} m")
