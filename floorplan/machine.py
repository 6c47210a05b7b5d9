"""Transition function of the floorplan editor: (state, event) -> (state, effects).

Phases are default, drawing and dragging. Every event runs to completion;
the only shape mutations are commits, vertex drags, vertex insertion on an
edge, vertex removal and shape deletion.
"""
import logging

from shared.geometry import GeometryError, Segment2, Polygon2, shape_vertices

from .constants import PRIMARY_BUTTON, ESCAPE_KEY
from .hover import NO_HOVER, resolve_hover
from .snapping import angle_sources, pick_angle_source, snap_cursor, clamp_cursor
from .state import (
    Phase, Mode, EditorState, Effect, EffectKind,
    PointerDown, PointerMove, PointerUp, DoubleClick, ContextMenu,
    KeyChange, SetMode, SetViewport, SetFloorplan, LoadShapes,
)

logger = logging.getLogger(__name__)

# ============================================================
# State helpers
# ============================================================
def _reset(state: EditorState) -> EditorState:
    """Back to default, dropping any gesture in progress."""
    return state._replace(phase=Phase.DEFAULT, current=(), hover=NO_HOVER,
                          drag_shape=None, drag_vertex=None, drag_started=False,
                          can_close=False)

def _end_drag(state: EditorState) -> EditorState:
    return state._replace(drag_shape=None, drag_vertex=None, drag_started=False)

def _angle_source(state: EditorState):
    if state.phase is Phase.DRAWING and state.current:
        return state.current[-1]
    if state.phase is Phase.DRAGGING and state.drag_started:
        shape = state.shapes[state.drag_shape]
        return pick_angle_source(angle_sources(shape, state.drag_vertex), state.modifiers.alt)
    return None

def _hover(state: EditorState, snap_hit):
    if state.phase is Phase.DEFAULT:
        return resolve_hover(state.cursor, state.shapes, state.magnetism,
                             edge_mode=state.modifiers.ctrl)
    if snap_hit.shape is not None:
        return snap_hit
    if state.phase is Phase.DRAGGING:
        return resolve_hover(state.cursor, state.shapes, state.magnetism,
                             exclude=state.drag_shape)
    return NO_HOVER

def _track(state: EditorState, position, moved: bool = False):
    """Snap the pointer, move the dragged vertex, refresh closure and hover."""
    if moved and state.phase is Phase.DRAGGING:
        state = state._replace(drag_started=True)
    active = (state.phase is Phase.DRAWING
              or (state.phase is Phase.DRAGGING and state.drag_started))
    cursor, snap_hit = snap_cursor(
        position, width=state.width, height=state.height,
        shapes=state.shapes, magnetism=state.magnetism,
        angle=active and state.modifiers.shift,
        edge=active and state.modifiers.ctrl,
        source=_angle_source(state),
        skip=state.drag_shape if state.phase is Phase.DRAGGING else None,
    )
    state = state._replace(mouse=position, cursor=cursor)

    effects = ()
    if state.phase is Phase.DRAGGING and state.drag_started:
        shapes = list(state.shapes)
        shapes[state.drag_shape] = shapes[state.drag_shape].update(state.drag_vertex, cursor)
        state = state._replace(shapes=tuple(shapes))
        effects = (Effect(EffectKind.UPDATE_VERTEX, state.drag_shape, state.drag_vertex),)

    can_close = (state.phase is Phase.DRAWING and state.mode is Mode.POLYGON
                 and len(state.current) >= 3
                 and cursor.distance(state.current[0]) < state.magnetism)
    state = state._replace(can_close=can_close)
    return state._replace(hover=_hover(state, snap_hit)), effects

# ============================================================
# Shape list mutations
# ============================================================
def _commit(state: EditorState):
    """Push the shape being drawn to the shape list."""
    if state.mode is Mode.LINE:
        shape = Segment2(state.current[0], state.current[1])
    else:
        if len(state.current) < 3:
            raise GeometryError(f"A polygon needs 3 vertices, got {len(state.current)}")
        shape = Polygon2(tuple(state.current))
    shapes = state.shapes + (shape,)
    logger.debug("Committed %s with %d vertices", type(shape).__name__,
                 len(shape_vertices(shape)))
    return _reset(state._replace(shapes=shapes)), (Effect(EffectKind.COMMIT, len(shapes) - 1),)

def _add_vertex(state: EditorState):
    """Pointer-up while drawing: extend, close, or finish the shape."""
    cursor = state.cursor
    far = state.current[-1].distance(cursor) > state.magnetism
    if state.mode is Mode.LINE:
        if far:
            return _commit(state._replace(current=state.current + (cursor,)))
    elif state.can_close:
        return _commit(state)
    elif far:
        return state._replace(current=state.current + (cursor,)), ()
    return state, ()

def _insert_vertex(state: EditorState, hover):
    """Split the hovered polygon edge at the projected point and grab it."""
    polygon = state.shapes[hover.shape]
    index = (hover.edge + 1) % len(polygon.points)
    shapes = list(state.shapes)
    shapes[hover.shape] = polygon.insert(index, hover.projection)
    logger.debug("Inserted vertex %d in shape %d", index, hover.shape)
    state = state._replace(shapes=tuple(shapes), phase=Phase.DRAGGING, hover=NO_HOVER,
                           drag_shape=hover.shape, drag_vertex=index, drag_started=True)
    return state, (Effect(EffectKind.INSERT_VERTEX, hover.shape, index),)

# ============================================================
# Event handlers
# ============================================================
def _pointer_down(state: EditorState, event: PointerDown):
    # Only plain primary clicks outside a drawing gesture
    if event.button != PRIMARY_BUTTON or event.detail > 1 or state.current:
        return state, ()
    if state.phase is not Phase.DEFAULT:
        return state, ()
    state, _ = _track(state, event.position)
    hover = state.hover
    if hover.vertex is not None:
        return state._replace(phase=Phase.DRAGGING, hover=NO_HOVER, drag_shape=hover.shape,
                              drag_vertex=hover.vertex, drag_started=False), ()
    if hover.edge is not None and state.modifiers.ctrl:
        return _insert_vertex(state, hover)
    start = clamp_cursor(event.position, state.width, state.height)
    return state._replace(phase=Phase.DRAWING, current=(start,), hover=NO_HOVER,
                          can_close=False), ()

def _pointer_move(state: EditorState, event: PointerMove):
    return _track(state, event.position, moved=True)

def _pointer_up(state: EditorState, event: PointerUp):
    if event.button != PRIMARY_BUTTON:
        return state, ()
    effects = []
    if state.phase is Phase.DRAGGING:
        if state.drag_started:
            state = _end_drag(state)._replace(phase=Phase.DEFAULT)
        else:
            # A click on a vertex without moving starts a new shape there
            start = clamp_cursor(event.position, state.width, state.height)
            state = _end_drag(state)._replace(phase=Phase.DRAWING, current=(start,))
    elif state.phase is Phase.DRAWING:
        state, _ = _track(state, event.position)
        state, done = _add_vertex(state)
        effects.extend(done)
    state, tracked = _track(state, event.position)
    effects.extend(tracked)
    return state, tuple(effects)

def _double_click(state: EditorState, event: DoubleClick):
    if (state.phase is not Phase.DRAWING or state.mode is not Mode.POLYGON
            or len(state.current) < 3):
        return state, ()
    state, effects = _commit(state)
    state, _ = _track(state, event.position)
    return state, effects

def _context_menu(state: EditorState, event: ContextMenu):
    if state.phase is not Phase.DEFAULT:
        return state, ()
    state, _ = _track(state, event.position)
    hover = state.hover
    if hover.shape is None:
        return state, ()
    shape = state.shapes[hover.shape]
    shapes = list(state.shapes)
    if hover.vertex is not None:
        # A polygon keeps at least 3 vertices; segment ends are never removed
        if not isinstance(shape, Polygon2) or len(shape.points) < 4:
            return state, ()
        shapes[hover.shape] = shape.remove(hover.vertex)
        effect = Effect(EffectKind.REMOVE_VERTEX, hover.shape, hover.vertex)
    else:
        del shapes[hover.shape]
        effect = Effect(EffectKind.DELETE_SHAPE, hover.shape)
    logger.debug("%s on shape %d", effect.kind.value, hover.shape)
    state, _ = _track(state._replace(shapes=tuple(shapes)), event.position)
    return state, (effect,)

def _key_change(state: EditorState, event: KeyChange):
    if event.key == ESCAPE_KEY:
        return _reset(state), ()
    state = state._replace(modifiers=event.modifiers)
    if state.mouse is None:
        return state, ()
    return _track(state, state.mouse)

def _set_mode(state: EditorState, event: SetMode):
    return _reset(state._replace(mode=event.mode)), ()

def _set_viewport(state: EditorState, event: SetViewport):
    if event.scale <= 0:
        raise GeometryError(f"Viewport scale must be positive, got {event.scale}")
    state = state._replace(scale=event.scale)
    if state.mouse is None:
        return state, ()
    return _track(state, state.mouse)

def _set_floorplan(state: EditorState, event: SetFloorplan):
    return _reset(state._replace(width=event.width, height=event.height)), ()

def _load_shapes(state: EditorState, event: LoadShapes):
    for shape in event.shapes:
        if isinstance(shape, Polygon2):
            if len(shape.points) < 3:
                raise GeometryError(f"A polygon needs 3 vertices, got {len(shape.points)}")
        elif not isinstance(shape, Segment2):
            raise GeometryError(f"Unknown shape type: {type(shape).__name__}")
    logger.debug("Loaded %d shapes", len(event.shapes))
    return _reset(state._replace(shapes=tuple(event.shapes))), (Effect(EffectKind.LOAD),)


_HANDLERS = {
    PointerDown: _pointer_down,
    PointerMove: _pointer_move,
    PointerUp: _pointer_up,
    DoubleClick: _double_click,
    ContextMenu: _context_menu,
    KeyChange: _key_change,
    SetMode: _set_mode,
    SetViewport: _set_viewport,
    SetFloorplan: _set_floorplan,
    LoadShapes: _load_shapes,
}


def transition(state: EditorState, event) -> tuple[EditorState, tuple[Effect, ...]]:
    """Apply one input event. Never mutates *state*."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unhandled editor event: {type(event).__name__}")
    return handler(state, event)
