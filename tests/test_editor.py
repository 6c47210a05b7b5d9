"""Tests for the editor state machine through floorplan/editor.py."""
import pytest
from shared.types import Point2
from shared.geometry import GeometryError, Polygon2, Segment2
from shared.status import Status
from floorplan.editor import FloorplanEditor
from floorplan.machine import transition
from floorplan.state import (
    Phase, Mode, EditorState, EffectKind,
    PointerDown, PointerUp, DoubleClick, ContextMenu, SetMode, SetViewport,
)


# ============================================================
# Drawing gestures
# ============================================================

class TestPolygonGesture:
    def test_three_clicks_and_close(self, make_editor, draw_polygon):
        editor = make_editor()
        effects = draw_polygon(editor, [(10, 10), (200, 10), (10, 200)])
        assert [e.kind for e in effects] == [EffectKind.COMMIT]
        shapes = editor.shapes()
        assert len(shapes) == 1
        assert shapes[0] == Polygon2.of([(10, 10), (200, 10), (10, 200)])
        assert editor.status is Status.OK
        assert editor.state.phase is Phase.DEFAULT

    def test_clicks_within_magnetism_do_not_add(self, make_editor):
        editor = make_editor()
        editor.click(10, 10)
        editor.click(14, 10)
        assert editor.state.current == (Point2(10, 10),)

    def test_cannot_close_before_three_vertices(self, make_editor):
        editor = make_editor()
        editor.click(10, 10)
        editor.move(200, 10)
        editor.click(200, 10)
        editor.move(10, 12)
        assert not editor.state.can_close
        editor.click(10, 12)
        # Far enough from (200, 10): appended instead of closing
        assert editor.shapes() == ()
        assert editor.state.current[-1] == Point2(10, 12)

    def test_double_click_commits(self, make_editor):
        editor = make_editor()
        for x, y in [(10, 10), (200, 10), (200, 200)]:
            editor.move(x, y)
            editor.click(x, y)
        editor.dispatch(PointerDown(Point2(200, 200), detail=2))
        effects = editor.dispatch(DoubleClick(Point2(200, 200)))
        assert [e.kind for e in effects] == [EffectKind.COMMIT]
        assert len(editor.shapes()[0].points) == 3

    def test_pointer_clamped_to_image(self, make_editor, draw_polygon):
        editor = make_editor()
        draw_polygon(editor, [(10, 10), (400, 10), (10, 200)])
        assert editor.shapes()[0].points[1] == Point2(300, 10)

    def test_escape_discards_drawing(self, make_editor):
        editor = make_editor()
        editor.click(10, 10)
        editor.move(100, 100)
        editor.click(100, 100)
        editor.escape()
        assert editor.state.phase is Phase.DEFAULT
        assert editor.state.current == ()
        assert editor.shapes() == ()

    def test_secondary_button_ignored(self, make_editor):
        editor = make_editor()
        effects = editor.dispatch(PointerDown(Point2(10, 10), button=2))
        assert effects == ()
        assert editor.state.phase is Phase.DEFAULT


class TestLineGesture:
    def test_press_drag_release(self, make_editor):
        editor = make_editor(mode=Mode.LINE)
        editor.press(0, 0)
        editor.move(150, 0)
        effects = editor.release(150, 0)
        assert [e.kind for e in effects] == [EffectKind.COMMIT]
        assert editor.shapes() == (Segment2(Point2(0, 0), Point2(150, 0)),)

    def test_press_release_without_move(self, make_editor):
        editor = make_editor(mode=Mode.LINE)
        editor.press(0, 0)
        effects = editor.release(150, 0)
        assert [e.kind for e in effects] == [EffectKind.COMMIT]
        assert editor.shapes() == (Segment2(Point2(0, 0), Point2(150, 0)),)
        assert editor.state.phase is Phase.DEFAULT

    def test_short_line_needs_second_click(self, make_editor):
        editor = make_editor(mode=Mode.LINE)
        editor.click(0, 0)
        assert editor.state.phase is Phase.DRAWING
        editor.move(0, 120)
        editor.click(0, 120)
        assert editor.shapes() == (Segment2(Point2(0, 0), Point2(0, 120)),)

    def test_set_mode_resets_gesture(self, make_editor):
        editor = make_editor()
        editor.click(10, 10)
        editor.dispatch(SetMode(Mode.LINE))
        assert editor.state.phase is Phase.DEFAULT
        assert editor.state.mode is Mode.LINE

    def test_shift_snaps_line_to_45_degrees(self, make_editor):
        editor = make_editor(mode=Mode.LINE)
        editor.hold(shift=True)
        editor.press(0, 0)
        editor.move(100, 7)
        editor.release(100, 7)
        seg = editor.shapes()[0]
        assert seg.q.x == pytest.approx(100)
        assert abs(seg.q.y) < 1e-9


# ============================================================
# Editing committed shapes
# ============================================================

class TestDrag:
    def test_drag_vertex(self, make_editor, room):
        editor = make_editor([room])
        editor.move(10, 10)
        editor.press(10, 10)
        assert editor.state.phase is Phase.DRAGGING
        effects = editor.move(30, 20)
        assert [e.kind for e in effects] == [EffectKind.UPDATE_VERTEX]
        assert effects[0].shape_index == 0 and effects[0].vertex_index == 0
        editor.release(30, 20)
        assert editor.shapes()[0].points[0] == Point2(30, 20)
        assert editor.state.phase is Phase.DEFAULT

    def test_pick_without_move_starts_drawing(self, make_editor, room):
        editor = make_editor([room])
        editor.click(110, 110)
        assert editor.state.phase is Phase.DRAWING
        assert editor.state.current == (Point2(110, 110),)
        assert editor.shapes() == (room,)

    def test_escape_keeps_dragged_position(self, make_editor, room):
        editor = make_editor([room])
        editor.press(10, 10)
        editor.move(40, 40)
        editor.escape()
        assert editor.state.phase is Phase.DEFAULT
        assert editor.shapes()[0].points[0] == Point2(40, 40)

    def test_drag_into_invalid_shape(self, make_editor, room):
        editor = make_editor([room])
        editor.press(10, 10)
        editor.move(200, 60)
        editor.release(200, 60)
        assert editor.status is Status.ERROR
        assert len(editor.shapes()) == 1

    def test_shift_drag_snaps_against_predecessor(self, make_editor, room):
        editor = make_editor([room])
        editor.hold(shift=True)
        editor.press(110, 10)
        editor.move(113, 40)
        editor.release(113, 40)
        p = editor.shapes()[0].points[1]
        assert p.x == pytest.approx(113)
        assert abs(p.y - 10) < 1e-9

    def test_shift_alt_drag_snaps_against_successor(self, make_editor, room):
        editor = make_editor([room])
        editor.hold(shift=True, alt=True)
        editor.press(110, 10)
        editor.move(113, 40)
        editor.release(113, 40)
        p = editor.shapes()[0].points[1]
        assert abs(p.x - 110) < 1e-9
        assert p.y == pytest.approx(40)

    def test_ctrl_drag_snaps_to_other_shapes_only(self, make_editor, room):
        other = Polygon2.of([(150, 10), (250, 10), (250, 110), (150, 110)])
        editor = make_editor([room, other])
        editor.hold(ctrl=True)
        editor.press(110, 10)
        assert editor.state.phase is Phase.DRAGGING
        # The dragged polygon's own edge at x=110 is ignored
        editor.move(112, 60)
        assert editor.shapes()[0].points[1] == Point2(112, 60)
        editor.move(146, 60)
        editor.release(146, 60)
        assert editor.shapes()[0].points[1] == Point2(150, 60)
        assert editor.shapes()[1] == other

    def test_ctrl_click_on_edge_inserts(self, make_editor, room):
        editor = make_editor([room])
        editor.hold(ctrl=True)
        effects = editor.press(60, 12)
        assert [e.kind for e in effects] == [EffectKind.INSERT_VERTEX]
        assert effects[0].vertex_index == 1
        assert editor.shapes()[0].points[1] == Point2(60, 10)
        editor.move(60, 0)
        editor.release(60, 0)
        assert editor.shapes()[0].points[1] == Point2(60, 0)
        assert len(editor.shapes()[0].points) == 5

    def test_insert_on_closing_edge(self, make_editor, room):
        editor = make_editor([room])
        editor.hold(ctrl=True)
        effects = editor.press(12, 60)
        assert effects[0].vertex_index == 0
        assert editor.shapes()[0].points[0] == Point2(10, 60)


class TestContextMenu:
    def test_remove_vertex(self, make_editor, room):
        editor = make_editor([room])
        effects = editor.dispatch(ContextMenu(Point2(110, 110)))
        assert [e.kind for e in effects] == [EffectKind.REMOVE_VERTEX]
        assert len(editor.shapes()[0].points) == 3

    def test_triangle_vertex_kept(self, make_editor):
        tri = Polygon2.of([(10, 10), (200, 10), (10, 200)])
        editor = make_editor([tri])
        assert editor.dispatch(ContextMenu(Point2(10, 10))) == ()
        assert editor.shapes() == (tri,)

    def test_segment_end_kept(self, make_editor, wall):
        editor = make_editor([wall])
        assert editor.dispatch(ContextMenu(Point2(150, 20))) == ()
        assert editor.shapes() == (wall,)

    def test_delete_shape_body(self, make_editor, room, wall):
        editor = make_editor([room, wall])
        effects = editor.dispatch(ContextMenu(Point2(60, 60)))
        assert [(e.kind, e.shape_index) for e in effects] == [(EffectKind.DELETE_SHAPE, 0)]
        assert editor.shapes() == (wall,)

    def test_delete_wall(self, make_editor, room, wall):
        editor = make_editor([room, wall])
        editor.dispatch(ContextMenu(Point2(200, 22)))
        assert editor.shapes() == (room,)

    def test_ignored_while_drawing(self, make_editor, room):
        editor = make_editor([room])
        editor.click(200, 200)
        assert editor.dispatch(ContextMenu(Point2(60, 60))) == ()
        assert editor.shapes() == (room,)


# ============================================================
# Viewport, status, subscribers
# ============================================================

def test_viewport_scales_magnetism(make_editor, room):
    editor = make_editor([room])
    editor.dispatch(SetViewport(2.0))
    assert editor.state.magnetism == 16.0
    editor.move(22, 10)
    assert editor.state.hover.vertex == 0


def test_viewport_rejects_non_positive():
    with pytest.raises(GeometryError):
        transition(EditorState(100, 100), SetViewport(0))


def test_unknown_event():
    with pytest.raises(TypeError):
        transition(EditorState(100, 100), object())


def test_status_levels(make_editor, room, bowtie, wall):
    assert make_editor().status is Status.WARNING
    assert make_editor([wall]).status is Status.WARNING
    assert make_editor([room]).status is Status.OK
    assert make_editor([bowtie.scaled(10)]).status is Status.ERROR


def test_in_progress_polygon_sets_error(make_editor):
    editor = make_editor()
    for x, y in [(10, 10), (100, 100), (100, 10), (10, 100)]:
        editor.move(x, y)
        editor.click(x, y)
    assert editor.state.phase is Phase.DRAWING
    assert editor.status is Status.ERROR


def test_two_vertex_outline_crossing_polygon_sets_error(make_editor, room):
    editor = make_editor([room])
    editor.click(60, 150)
    assert editor.status is Status.OK
    editor.move(60, 60)
    editor.click(60, 60)
    assert len(editor.state.current) == 2
    assert editor.status is Status.ERROR


def test_subscribers_receive_effects(make_editor, draw_polygon):
    editor = make_editor()
    seen = []
    editor.subscribe(seen.append)
    draw_polygon(editor, [(10, 10), (200, 10), (10, 200)])
    assert [e.kind for e in seen] == [EffectKind.COMMIT]


def test_transition_does_not_mutate_state():
    state = EditorState(300, 300)
    after, _ = transition(state, PointerDown(Point2(10, 10)))
    assert state.phase is Phase.DEFAULT
    assert after.phase is Phase.DRAWING


def test_pointer_up_without_gesture(make_editor):
    editor = make_editor()
    assert editor.dispatch(PointerUp(Point2(5, 5))) == ()
    assert editor.state.cursor == Point2(5, 5)


def test_json_round_trip(make_editor, room, wall):
    editor = make_editor([room, wall])
    data = editor.to_json()
    assert data["floorplan"] == {"height": 300, "width": 300}
    assert data["structure"][0][0] == {"x": 10.0, "y": 10.0}
    other = FloorplanEditor(1, 1)
    other.load_json(data)
    assert other.shapes() == editor.shapes()
    assert other.state.width == 300
