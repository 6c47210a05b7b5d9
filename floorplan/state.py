"""Editor state, input events and transition effects.

Everything here is an immutable value; floorplan.machine.transition()
maps (state, event) to (state, effects).
"""
from enum import Enum
from typing import NamedTuple

from shared.types import Point2

from .constants import MAGNETISM, PRIMARY_BUTTON
from .hover import Hover, NO_HOVER


class Phase(Enum):
    DEFAULT = "default"
    DRAWING = "drawing"
    DRAGGING = "dragging"


class Mode(Enum):
    """What a drawing gesture produces."""
    POLYGON = "polygon"
    LINE = "line"


class Modifiers(NamedTuple):
    """Snapshot of the modifier keys."""
    shift: bool = False  # 45-degree angle snap
    ctrl: bool = False   # edge snap / vertex insertion (Ctrl or Meta)
    alt: bool = False    # angle-snap against the successor vertex

# ============================================================
# Events
# ============================================================
class PointerDown(NamedTuple):
    position: Point2
    button: int = PRIMARY_BUTTON
    detail: int = 1  # click count; 2 for the second press of a double click

class PointerMove(NamedTuple):
    position: Point2

class PointerUp(NamedTuple):
    position: Point2
    button: int = PRIMARY_BUTTON

class DoubleClick(NamedTuple):
    position: Point2

class ContextMenu(NamedTuple):
    position: Point2

class KeyChange(NamedTuple):
    """Key press or release, with the modifier snapshot after it."""
    modifiers: Modifiers
    key: str | None = None

class SetMode(NamedTuple):
    mode: Mode

class SetViewport(NamedTuple):
    """Image pixels per screen pixel."""
    scale: float

class SetFloorplan(NamedTuple):
    width: float
    height: float

class LoadShapes(NamedTuple):
    shapes: tuple


Event = (PointerDown | PointerMove | PointerUp | DoubleClick | ContextMenu
         | KeyChange | SetMode | SetViewport | SetFloorplan | LoadShapes)

# ============================================================
# Effects
# ============================================================
class EffectKind(Enum):
    COMMIT = "commit"
    DELETE_SHAPE = "delete_shape"
    UPDATE_VERTEX = "update_vertex"
    INSERT_VERTEX = "insert_vertex"
    REMOVE_VERTEX = "remove_vertex"
    LOAD = "load"


class Effect(NamedTuple):
    """A change to the committed shape list."""
    kind: EffectKind
    shape_index: int | None = None
    vertex_index: int | None = None

# ============================================================
# State
# ============================================================
class EditorState(NamedTuple):
    width: float
    height: float
    scale: float = 1.0
    mode: Mode = Mode.POLYGON
    phase: Phase = Phase.DEFAULT
    shapes: tuple = ()
    current: tuple[Point2, ...] = ()   # vertices of the shape being drawn
    modifiers: Modifiers = Modifiers()
    mouse: Point2 | None = None        # last raw pointer position
    cursor: Point2 | None = None       # snapped pointer position
    hover: Hover = NO_HOVER
    drag_shape: int | None = None
    drag_vertex: int | None = None
    drag_started: bool = False         # False while a picked vertex has not moved yet
    can_close: bool = False

    @property
    def magnetism(self) -> float:
        return MAGNETISM * self.scale
