"""Render a traced floorplan document to SVG.

Reads the JSON written by FloorplanEditor.to_json(), replays it through
the editor and draws the resulting frame: the outside mask, every shape
stroke and invalid polygons in red.
"""
import argparse
import json
import logging
import os

from shared.logs import setup_logging
from shared.svg import (
    make_svg_transform, polygon_el, polyline_el, circle_el, evenodd_path, svg_document,
)
from shared.types import Point2
from floorplan.constants import HANDLE_RADIUS, MASK_FILL
from floorplan.editor import FloorplanEditor
from floorplan.render import Frame

logger = logging.getLogger(__name__)

# ============================================================
# Frame rendering
# ============================================================

def render_frame_svg(frame: Frame, width: float, height: float, scale: float = 1.0) -> str:
    """SVG text for one editor frame over a width x height image."""
    to_svg = make_svg_transform(scale)
    out = []
    if frame.mask:
        # Image rectangle plus every polygon: even-odd leaves the inside clear
        outer = (Point2(0, 0), Point2(width, 0), Point2(width, height), Point2(0, height))
        rings = [outer] + [poly.points for poly in frame.mask]
        out.append(evenodd_path(rings, to_svg, MASK_FILL))
    for stroke in frame.strokes:
        if stroke.kind == "polygon":
            out.append(polygon_el(stroke.points, to_svg, stroke.color, stroke.width,
                                  stroke.fill or "none"))
        elif stroke.kind == "polyline":
            out.append(polyline_el(stroke.points, to_svg, stroke.color, stroke.width, stroke.dash))
        elif stroke.kind == "handle":
            out.append(circle_el(stroke.points[0], HANDLE_RADIUS, to_svg,
                                 stroke.fill or "none", stroke.color, stroke.width))
        else:
            raise ValueError(f"Unknown stroke kind: {stroke.kind}")
    return svg_document(width * scale, height * scale, out)


def build_floorplan_svg(document: dict, scale: float = 1.0) -> tuple[str, FloorplanEditor]:
    """Load *document* into a fresh editor and render its idle frame."""
    size = document["floorplan"]
    editor = FloorplanEditor(size["width"], size["height"])
    editor.load_json(document)
    frame = editor.redraw()
    return render_frame_svg(frame, editor.state.width, editor.state.height, scale), editor

# ============================================================
# Main entry point
# ============================================================

def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("document", help="floorplan JSON written by the editor")
    parser.add_argument("-o", "--output", help="SVG path (default: beside the document)")
    parser.add_argument("--scale", type=float, default=1.0, help="SVG units per image pixel")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    with open(args.document) as f:
        document = json.load(f)
    svg_content, editor = build_floorplan_svg(document, args.scale)

    svg_path = args.output or os.path.splitext(args.document)[0] + ".svg"
    with open(svg_path, "w") as f:
        f.write(svg_content)
    logger.debug("Wrote %d bytes", len(svg_content))

    shapes = editor.shapes()
    print(f"Floorplan written to {svg_path}")
    print(f"Image:  {editor.state.width:.0f} x {editor.state.height:.0f} px")
    print(f"Shapes: {len(shapes)}")
    print(f"Status: {editor.status.name}")
    print()
    for i, shape in enumerate(shapes):
        print(f"  {i:<3d} {type(shape).__name__:<9s} {len(shape.points)} vertices")


if __name__ == "__main__":
    main()
