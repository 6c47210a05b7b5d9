"""Resolve what lies under the cursor: a vertex, an edge, or a shape body.

Priority is strict: vertex, then edge (only when edge mode is on), then
shape containment. The resolver only reads the shape list.
"""
from typing import NamedTuple

from shared.types import Point2
from shared.geometry import Segment2, Polygon2, shape_vertices


class Hover(NamedTuple):
    """Hit-test result. All fields None means nothing is hovered."""
    shape: int | None = None
    vertex: int | None = None
    edge: int | None = None
    projection: Point2 | None = None


NO_HOVER = Hover()


def find_hover_vertex(cursor: Point2, shapes, magnetism: float,
                      exclude: int | None = None) -> Hover | None:
    """First shape in list order having a vertex within *magnetism*.

    Ties go to list order, not to the nearest vertex.
    """
    for i, shape in enumerate(shapes):
        if i == exclude:
            continue
        for j, pt in enumerate(shape_vertices(shape)):
            if cursor.distance(pt) <= magnetism:
                return Hover(shape=i, vertex=j)
    return None


def find_hover_edge(cursor: Point2, shapes, magnetism: float,
                    exclude: int | None = None) -> Hover | None:
    """Nearest polygon edge across all polygons, closer than *magnetism*."""
    best_sq = magnetism * magnetism
    best = None
    for i, shape in enumerate(shapes):
        if i == exclude or not isinstance(shape, Polygon2):
            continue
        for k, edge in enumerate(shape.edges()):
            projection = edge.project(cursor, True)
            sq = projection.to(cursor).sqnorm()
            if sq < best_sq:
                best_sq = sq
                best = Hover(shape=i, edge=k, projection=projection)
    return best


def find_hover_shape(cursor: Point2, shapes, magnetism: float,
                     exclude: int | None = None) -> Hover | None:
    """Shape body under the cursor.

    Segments match by distance and win over polygons. Among polygons
    containing the cursor, a later one replaces the current pick only when
    its bounding box fits inside the pick's, so the most nested wins.
    """
    best = None
    best_is_segment = False
    best_box = None
    for i, shape in enumerate(shapes):
        if i == exclude:
            continue
        if isinstance(shape, Segment2):
            if shape.distance(cursor) <= magnetism:
                best, best_is_segment = i, True
        elif isinstance(shape, Polygon2):
            if best_is_segment or not shape.contains(cursor):
                continue
            box = shape.bounding_box()
            if best_box is None or best_box.contains(box):
                best, best_box = i, box
    return None if best is None else Hover(shape=best)


def resolve_hover(cursor: Point2, shapes, magnetism: float,
                  edge_mode: bool = False, exclude: int | None = None) -> Hover:
    """Hover state for *cursor*, skipping the shape at index *exclude*."""
    hit = find_hover_vertex(cursor, shapes, magnetism, exclude)
    if hit is None and edge_mode:
        hit = find_hover_edge(cursor, shapes, magnetism, exclude)
    if hit is None:
        hit = find_hover_shape(cursor, shapes, magnetism, exclude)
    return NO_HOVER if hit is None else hit
