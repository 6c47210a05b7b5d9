"""Headless floorplan editor: owns the state and feeds events to transition()."""
import logging
from typing import Callable

from shared.schema import FloorplanDocument
from shared.status import Status
from shared.types import Point2

from .constants import ESCAPE_KEY
from .machine import transition
from .render import Frame, render_frame, editor_status
from .state import (
    EditorState, Effect, Mode, Modifiers,
    PointerDown, PointerMove, PointerUp, KeyChange, SetFloorplan, LoadShapes,
)

logger = logging.getLogger(__name__)


class FloorplanEditor:
    """Shape list editor for one floorplan image.

    Subscribers receive every Effect produced by dispatch(); that is the
    only channel through which other components learn about changes.
    """

    def __init__(self, width: float, height: float, scale: float = 1.0,
                 mode: Mode = Mode.POLYGON):
        self._state = EditorState(width=width, height=height, scale=scale, mode=mode)
        self._listeners: list[Callable[[Effect], None]] = []

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def status(self) -> Status:
        return editor_status(self._state)

    def subscribe(self, callback: Callable[[Effect], None]) -> None:
        self._listeners.append(callback)

    def dispatch(self, event) -> tuple[Effect, ...]:
        self._state, effects = transition(self._state, event)
        for effect in effects:
            for callback in self._listeners:
                callback(effect)
        return effects

    # --- pointer shorthands ---

    def press(self, x: float, y: float):
        return self.dispatch(PointerDown(Point2(x, y)))

    def hold(self, shift: bool = False, ctrl: bool = False, alt: bool = False):
        """Set the modifier keys currently held."""
        return self.dispatch(KeyChange(Modifiers(shift, ctrl, alt)))

    def escape(self):
        return self.dispatch(KeyChange(self._state.modifiers, ESCAPE_KEY))

    def move(self, x: float, y: float):
        return self.dispatch(PointerMove(Point2(x, y)))

    def release(self, x: float, y: float):
        return self.dispatch(PointerUp(Point2(x, y)))

    def click(self, x: float, y: float) -> tuple[Effect, ...]:
        """Press and release at the same spot."""
        return self.press(x, y) + self.release(x, y)

    # --- read side ---

    def shapes(self) -> tuple:
        """Snapshot of the committed shapes, in z-order."""
        return self._state.shapes

    def redraw(self) -> Frame:
        return render_frame(self._state)

    def to_document(self) -> FloorplanDocument:
        s = self._state
        return FloorplanDocument.from_shapes(s.width, s.height, s.shapes)

    def to_json(self) -> dict:
        return self.to_document().model_dump()

    def load_json(self, data: dict) -> None:
        """Replace the image size and shapes with a serialized document."""
        doc = FloorplanDocument.model_validate(data)
        self.dispatch(SetFloorplan(doc.floorplan.width, doc.floorplan.height))
        self.dispatch(LoadShapes(doc.to_shapes()))
        logger.info("Loaded %d boundaries and %d walls", len(doc.structure), len(doc.walls))
