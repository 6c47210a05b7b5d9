"""Generate the extruded wall view of a traced floorplan as SVG.

Every boundary and wall edge is drawn as a vertical quad over the floor
outline, seen from a yaw/pitch orbit around the image centre.
"""
import argparse
import json
import logging
import math
import os

from shared.geometry import GeometryError
from shared.logs import setup_logging
from shared.schema import FloorplanDocument, AnchorRecord
from shared.svg import make_svg_transform, polygon_el, svg_document
from survey.overlay import GeoOverlay
from walls.constants import WALL_FILL, FLOOR_STROKE
from walls.extrude import (
    Orbit, wall_height_px, view_scale, floor_transform, project_walls,
)

logger = logging.getLogger(__name__)

# ============================================================
# Data computation
# ============================================================

def build_wall_data(document: FloorplanDocument, canvas_size=(800, 600),
                    orbit: Orbit = Orbit(), height_m: float | None = None,
                    px_per_m: float | None = None) -> dict:
    """Floor outlines and wall quads in canvas coordinates."""
    image_size = (document.floorplan.width, document.floorplan.height)
    shapes = document.to_shapes()
    scale = view_scale(canvas_size, image_size)
    height = wall_height_px(height_m, px_per_m)
    floor = floor_transform(orbit, scale, image_size, canvas_size)
    outlines = [floor.apply_all(shape.points) for shape in shapes]
    quads = project_walls(shapes, orbit, scale, image_size, canvas_size, height)
    logger.debug("Projected %d wall quads at height %.1f px", len(quads), height)
    return {
        "canvas_size": canvas_size, "image_size": image_size,
        "scale": scale, "height": height, "orbit": orbit,
        "outlines": outlines, "quads": quads,
    }


def render_walls_svg(data: dict) -> str:
    to_svg = make_svg_transform()
    out = []
    for outline in data["outlines"]:
        out.append(polygon_el(outline, to_svg, FLOOR_STROKE, 1))
    for quad in data["quads"]:
        out.append(polygon_el(quad.points, to_svg, "none", 0, WALL_FILL))
    width, height = data["canvas_size"]
    return svg_document(width, height, out)


def anchor_scale(document: FloorplanDocument, records) -> float | None:
    """Pixel-per-metre scale of a saved placement.

    A placement read back from disk has no scale, so this is None and the
    wall height falls back to the default unless --px-per-m is given.
    Raises GeometryError when the anchors do not determine a map.
    """
    overlay = GeoOverlay(document.floorplan.width, document.floorplan.height)
    if not overlay.load(records):
        raise GeometryError("Saved anchors are collinear")
    return overlay.scale

# ============================================================
# Main entry point
# ============================================================

def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("document", help="floorplan JSON written by the editor")
    parser.add_argument("-o", "--output", help="SVG path (default: <document>_walls.svg)")
    parser.add_argument("--anchors", help="JSON list of 3 {x, y, lng, lat} records")
    parser.add_argument("--wall-height", type=float, default=math.nan, help="metres")
    parser.add_argument("--px-per-m", type=float, help="image pixels per metre")
    parser.add_argument("--yaw", type=float, default=Orbit().yaw)
    parser.add_argument("--pitch", type=float, default=Orbit().pitch)
    parser.add_argument("--size", type=int, nargs=2, default=(800, 600), metavar=("W", "H"))
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    with open(args.document) as f:
        document = FloorplanDocument.model_validate(json.load(f))
    px_per_m = args.px_per_m
    if args.anchors:
        with open(args.anchors) as f:
            records = [AnchorRecord.model_validate(r) for r in json.load(f)]
        px_per_m = anchor_scale(document, records) if px_per_m is None else px_per_m

    orbit = Orbit(args.yaw, args.pitch).dragged(0, 0)  # clamps pitch
    data = build_wall_data(document, tuple(args.size), orbit, args.wall_height, px_per_m)
    svg_content = render_walls_svg(data)

    svg_path = args.output or os.path.splitext(args.document)[0] + "_walls.svg"
    with open(svg_path, "w", encoding="utf-8") as f:
        f.write(svg_content)
    print(f"Wall view written to {svg_path}")
    print(f"Walls:       {len(data['quads'])}")
    print(f"Wall height: {data['height']:.1f} px"
          + ("" if px_per_m is None else f" ({px_per_m:.2f} px/m)"))
    print(f"Orbit:       yaw {math.degrees(orbit.yaw):.1f} deg, pitch {math.degrees(orbit.pitch):.1f} deg")


if __name__ == "__main__":
    main()
