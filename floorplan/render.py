"""Display list of the editor: a pure function of the state.

The host draws a Frame however it likes (canvas, SVG, ...). Rendering
the same state twice gives equal frames.
"""
from typing import NamedTuple

from shared.types import Point2
from shared.geometry import Segment2, Polygon2, is_invalid
from shared.status import Status

from .constants import (
    LINE_WIDTH, HOVERED_LINE_WIDTH, GHOST_DASH,
    STROKE_COLOR, INVALID_COLOR, HANDLE_FILL, CLOSE_HANDLE_FILL, INSERT_MARKER_FILL,
    CURSOR_DRAW, CURSOR_CLOSE, CURSOR_GRAB, CURSOR_GRABBING, CURSOR_INSERT,
)
from .state import EditorState, Phase, Mode


class Stroke(NamedTuple):
    """One drawing instruction.

    kind is "polygon" (closed), "polyline" (open) or "handle" (a circle of
    radius HANDLE_RADIUS centred on its single point).
    """
    kind: str
    points: tuple[Point2, ...]
    color: str = STROKE_COLOR
    width: float = LINE_WIDTH
    dash: tuple[float, float] | None = None
    fill: str | None = None


class Frame(NamedTuple):
    status: Status
    cursor: str
    mask: tuple[Polygon2, ...]   # filled outside the polygons (inverse even-odd)
    strokes: tuple[Stroke, ...]


def pending_polygon(state: EditorState) -> Polygon2 | None:
    """Polygon being drawn, without the cursor, once it has an edge.

    Two vertices already form a closed ring (there and back), so an outline
    crossing a committed polygon is flagged before its third vertex.
    """
    if state.phase is Phase.DRAWING and state.mode is Mode.POLYGON and len(state.current) >= 2:
        return Polygon2(tuple(state.current))
    return None


def tentative_polygon(state: EditorState) -> Polygon2 | None:
    """Polygon being drawn with the cursor appended as its last vertex."""
    if (state.phase is Phase.DRAWING and state.mode is Mode.POLYGON
            and state.current and state.cursor is not None):
        return Polygon2(tuple(state.current) + (state.cursor,))
    return None


def shapes_status(shapes, pending: Polygon2 | None = None) -> Status:
    """ERROR if any polygon is invalid, WARNING if none exists, else OK."""
    polygons = [i for i, s in enumerate(shapes) if isinstance(s, Polygon2)]
    if any(is_invalid(shapes[i], shapes, skip=i) for i in polygons):
        return Status.ERROR
    if pending is not None and is_invalid(pending, shapes):
        return Status.ERROR
    return Status.OK if polygons else Status.WARNING


def editor_status(state: EditorState) -> Status:
    return shapes_status(state.shapes, pending_polygon(state))


def _shape_strokes(state: EditorState, index: int, shape) -> list[Stroke]:
    hover = state.hover
    hovered = hover.shape == index
    whole = hovered and hover.vertex is None and (hover.edge is None or isinstance(shape, Segment2))
    width = HOVERED_LINE_WIDTH if whole else LINE_WIDTH
    out = []
    if isinstance(shape, Segment2):
        out.append(Stroke("polyline", shape.points, STROKE_COLOR, width))
    else:
        color = INVALID_COLOR if is_invalid(shape, state.shapes, skip=index) else STROKE_COLOR
        out.append(Stroke("polygon", shape.points, color, width))
        if hovered and hover.edge is not None:
            out.append(Stroke("polyline", shape.edges()[hover.edge].points,
                              STROKE_COLOR, HOVERED_LINE_WIDTH))
    if hovered:
        for j, pt in enumerate(shape.points):
            w = HOVERED_LINE_WIDTH if j == hover.vertex else LINE_WIDTH
            out.append(Stroke("handle", (pt,), STROKE_COLOR, w, fill=HANDLE_FILL))
    return out


def _drawing_strokes(state: EditorState) -> list[Stroke]:
    out = []
    if state.mode is Mode.LINE:
        out.append(Stroke("polyline", (state.current[0], state.cursor), dash=GHOST_DASH))
    else:
        pending = pending_polygon(state)
        color = INVALID_COLOR if pending is not None and is_invalid(pending, state.shapes) else STROKE_COLOR
        out.append(Stroke("polyline", tuple(state.current), color))
        # Ghost edge turns red when adding the cursor would break validity
        ghost = INVALID_COLOR if is_invalid(tentative_polygon(state), state.shapes) else STROKE_COLOR
        out.append(Stroke("polyline", (state.current[-1], state.cursor), ghost, dash=GHOST_DASH))
    if state.can_close:
        out.append(Stroke("handle", (state.current[0],), fill=CLOSE_HANDLE_FILL))
    return out


def render_frame(state: EditorState) -> Frame:
    """Display list, status and pointer cursor for *state*."""
    strokes = []
    for i, shape in enumerate(state.shapes):
        strokes.extend(_shape_strokes(state, i, shape))

    hover = state.hover
    if state.phase is Phase.DRAWING and state.cursor is not None:
        strokes.extend(_drawing_strokes(state))
        cursor = CURSOR_CLOSE if state.can_close else CURSOR_DRAW
    elif state.phase is Phase.DRAGGING:
        cursor = CURSOR_GRABBING
    elif hover.projection is not None:
        strokes.append(Stroke("handle", (hover.projection,), INSERT_MARKER_FILL,
                              fill=INSERT_MARKER_FILL))
        cursor = CURSOR_INSERT
    else:
        cursor = CURSOR_GRAB if hover.vertex is not None else CURSOR_DRAW

    mask = tuple(s for s in state.shapes if isinstance(s, Polygon2))
    return Frame(editor_status(state), cursor, mask, tuple(strokes))
