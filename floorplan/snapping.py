"""Cursor snapping: image bounds, 45-degree rays, and nearby edges."""
from shared.types import Point2, Vector2, Ray2
from shared.geometry import Segment2, Polygon2, shape_edges

from .hover import Hover, NO_HOVER


def clamp_cursor(cursor: Point2, width: float, height: float) -> Point2:
    """Keep the cursor inside the floorplan image."""
    return cursor.clamped(width, height)


def angle_sources(shape, vertex: int) -> list[Point2]:
    """Neighbours a dragged vertex can be angle-snapped against.

    For a polygon: [successor, predecessor]. For a segment: [other end].
    """
    if isinstance(shape, Segment2):
        return [shape.points[vertex - 1]]
    if isinstance(shape, Polygon2):
        pts = shape.points; n = len(pts)
        return [pts[(vertex + 1) % n], pts[(vertex - 1) % n]]
    return []


def pick_angle_source(sources: list[Point2], alternate: bool) -> Point2 | None:
    """Predecessor by default, successor with the alternate modifier."""
    if not sources:
        return None
    return sources[0] if alternate else sources[-1]


def angle_snap(source: Point2, cursor: Point2) -> Point2:
    """Project *cursor* on the ray from *source* at the nearest 45-degree angle."""
    delta = source.to(cursor)
    if delta.sqnorm() == 0.0:
        return cursor
    angle = delta.angle().rounded()
    direction = Vector2(angle.cos, angle.sin)
    return source.plus(direction.scaled(delta.dot(direction)))


def snap_to_closest_edge(cursor: Point2, shapes, magnetism: float,
                         skip: int | None = None,
                         ray_source: Point2 | None = None) -> tuple[Point2, Hover]:
    """Closest point on any edge within *magnetism* of *cursor*.

    With *ray_source*, candidates are the intersections of the ray from
    *ray_source* through *cursor* with each edge instead of projections.
    Returns the cursor unchanged and NO_HOVER when nothing is close enough.
    """
    best_sq = float("inf")
    threshold = magnetism * magnetism
    best, hit = cursor, NO_HOVER
    ray = None if ray_source is None else Ray2(ray_source, cursor)
    for i, shape in enumerate(shapes):
        if i == skip:
            continue
        for k, edge in enumerate(shape_edges(shape)):
            if ray is None:
                candidate = edge.project(cursor, True)
            else:
                candidate = edge.intersect(ray)
                if candidate is None:
                    continue
            sq = cursor.to(candidate).sqnorm()
            if sq < best_sq and sq <= threshold:
                best_sq = sq
                best, hit = candidate, Hover(shape=i, edge=k)
    return best, hit


def snap_cursor(raw: Point2, *, width: float, height: float, shapes, magnetism: float,
                angle: bool = False, edge: bool = False,
                source: Point2 | None = None, skip: int | None = None) -> tuple[Point2, Hover]:
    """Full snapping pipeline applied before any state decision.

    *angle* and *edge* say whether the modifiers are held while drawing or
    dragging; *source* is the angle-snap origin, *skip* the dragged shape.
    """
    cursor = clamp_cursor(raw, width, height)
    ray_source = None
    if angle and source is not None:
        cursor = angle_snap(source, cursor)
        ray_source = source
    if edge:
        return snap_to_closest_edge(cursor, shapes, magnetism, skip, ray_source)
    return cursor, NO_HOVER
