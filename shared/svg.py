"""SVG transform factory and element helpers."""
from typing import Callable

Transform = Callable[[float, float], tuple[float, float]]


def make_svg_transform(scale: float = 1.0, dx: float = 0.0, dy: float = 0.0) -> Transform:
    """Create a to_svg closure mapping image pixels to SVG user units."""
    def to_svg(x: float, y: float) -> tuple[float, float]:
        return (dx + x * scale, dy + y * scale)
    return to_svg


def _svg_pts(points, to_svg: Transform) -> str:
    return " ".join(f"{to_svg(*p)[0]:.1f},{to_svg(*p)[1]:.1f}" for p in points)


def polygon_el(points, to_svg: Transform, stroke: str, width: float, fill: str = "none") -> str:
    return (f'<polygon points="{_svg_pts(points, to_svg)}" fill="{fill}"'
            f' stroke="{stroke}" stroke-width="{width}"/>')


def polyline_el(points, to_svg: Transform, stroke: str, width: float,
                dash: tuple[float, float] | None = None) -> str:
    d = f' stroke-dasharray="{dash[0]},{dash[1]}"' if dash else ""
    return (f'<polyline points="{_svg_pts(points, to_svg)}" fill="none"'
            f' stroke="{stroke}" stroke-width="{width}"{d}/>')


def circle_el(center, r: float, to_svg: Transform, fill: str,
              stroke: str = "#000", width: float = 1) -> str:
    cx, cy = to_svg(*center)
    return (f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r:.1f}" fill="{fill}"'
            f' stroke="{stroke}" stroke-width="{width}"/>')


def evenodd_path(rings, to_svg: Transform, fill: str) -> str:
    """Single path of closed rings filled with the even-odd rule."""
    parts = []
    for ring in rings:
        pts = [to_svg(*p) for p in ring]
        parts.append("M " + " L ".join(f"{x:.1f},{y:.1f}" for x, y in pts) + " Z")
    return f'<path d="{" ".join(parts)}" fill="{fill}" fill-rule="evenodd" stroke="none"/>'


def svg_document(width: float, height: float, body: list[str]) -> str:
    out = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:.0f}" height="{height:.0f}"'
           f' viewBox="0 0 {width:.0f} {height:.0f}">']
    out.extend(body)
    out.append('</svg>')
    return "\n".join(out)
