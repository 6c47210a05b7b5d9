"""Shared test fixtures for the floorplan editor and map alignment tests."""
import pytest
from shared.types import Point2
from shared.geometry import Polygon2, Segment2
from floorplan.editor import FloorplanEditor
from floorplan.state import Mode


@pytest.fixture
def square():
    """Convex quad (0,0),(10,0),(10,10),(0,10)."""
    return Polygon2.of([(0, 0), (10, 0), (10, 10), (0, 10)])


@pytest.fixture
def bowtie():
    """Self-intersecting quad (0,0),(10,10),(10,0),(0,10)."""
    return Polygon2.of([(0, 0), (10, 10), (10, 0), (0, 10)])


@pytest.fixture
def room():
    """100 x 100 room well inside a 300 x 300 image."""
    return Polygon2.of([(10, 10), (110, 10), (110, 110), (10, 110)])


@pytest.fixture
def wall():
    return Segment2(Point2(150, 20), Point2(250, 20))


@pytest.fixture
def make_editor():
    """Factory: FloorplanEditor over a 300 x 300 image, optionally preloaded."""
    def _make(shapes=(), mode=Mode.POLYGON, width=300, height=300):
        editor = FloorplanEditor(width, height, mode=mode)
        if shapes:
            editor.load_json({
                "floorplan": {"width": width, "height": height},
                "structure": [[{"x": p.x, "y": p.y} for p in s.points]
                              for s in shapes if isinstance(s, Polygon2)],
                "walls": [[{"x": p.x, "y": p.y} for p in s.points]
                          for s in shapes if isinstance(s, Segment2)],
            })
        return editor
    return _make


@pytest.fixture
def draw_polygon():
    """Trace a polygon by clicking each vertex, then close on the first."""
    def _draw(editor, points):
        for x, y in points:
            editor.move(x, y)
            editor.click(x, y)
        x0, y0 = points[0]
        editor.move(x0, y0 + 2)
        return editor.click(x0, y0 + 2)
    return _draw
