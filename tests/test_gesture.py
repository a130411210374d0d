import pytest

from tilematch.components.move import Direction, Move
from tilematch.systems.gesture import direction_for_delta

LAYOUT = [
    ['A', 'B', 'A'],
    ['B', 'A', 'B'],
    ['A', 'B', 'A'],
]


@pytest.mark.parametrize(
    "dx,dy,expected",
    [
        (0, 0, None),
        (99.9, 0, None),
        (-99.9, 99.9, None),
        (100, 0, Direction.EAST),
        (-100, 40, Direction.WEST),
        (30, 150, Direction.SOUTH),
        (-30, -150, Direction.NORTH),
        (120, 120, Direction.SOUTH),
        (120, -120, Direction.NORTH),
    ],
)
def test_direction_for_delta(dx, dy, expected):
    assert direction_for_delta(dx, dy, 100.0) is expected


def test_candidate_tracks_latest_drag_position(make_engine):
    engine = make_engine(LAYOUT)
    assert engine.on_drag_start((1, 1))
    assert engine.on_drag_move(150, 10) == Move((1, 1), Direction.EAST)
    # change of mind mid-drag
    assert engine.on_drag_move(-20, -180) == Move((1, 1), Direction.NORTH)
    # retreating under the threshold clears the candidate
    assert engine.on_drag_move(20, 20) is None
    assert engine.gesture_system.candidate is None


def test_out_of_bounds_target_clears_candidate(make_engine):
    engine = make_engine(LAYOUT)
    engine.on_drag_start((0, 0))
    assert engine.on_drag_move(0, 150) == Move((0, 0), Direction.SOUTH)
    assert engine.on_drag_move(0, -150) is None
    assert engine.on_drag_move(-150, 0) is None


def test_move_target():
    assert Move((2, 2), Direction.NORTH).target == (1, 2)
    assert Move((2, 2), Direction.SOUTH).target == (3, 2)
    assert Move((2, 2), Direction.EAST).target == (2, 3)
    assert Move((2, 2), Direction.WEST).target == (2, 1)


def test_second_drag_start_is_rejected(make_engine):
    engine = make_engine(LAYOUT)
    assert engine.on_drag_start((0, 0))
    engine.on_drag_move(150, 0)
    assert not engine.on_drag_start((2, 2))
    state = engine.gesture_system.state
    assert state.source == (0, 0)
    assert state.candidate == Move((0, 0), Direction.EAST)


def test_drag_start_outside_board_is_rejected(make_engine):
    engine = make_engine(LAYOUT)
    assert not engine.on_drag_start((3, 0))
    assert not engine.gesture_system.active


def test_drag_move_without_active_gesture_is_ignored(make_engine):
    engine = make_engine(LAYOUT)
    assert engine.on_drag_move(500, 0) is None


def test_drag_move_to_uses_origin(make_engine):
    engine = make_engine(LAYOUT)
    engine.on_drag_start((1, 1), x=400.0, y=300.0)
    assert engine.gesture_system.drag_move_to(410.0, 190.0) == Move((1, 1), Direction.NORTH)
    assert engine.gesture_system.drag_move_to(450.0, 310.0) is None


def test_custom_threshold(make_engine):
    engine = make_engine(LAYOUT, drag_threshold=8)
    engine.on_drag_start((1, 1))
    assert engine.on_drag_move(-8, 0) == Move((1, 1), Direction.WEST)


def test_drag_end_resets_gesture(make_engine):
    engine = make_engine(LAYOUT)
    engine.on_drag_start((1, 1))
    engine.on_drag_move(5, 5)
    assert engine.on_drag_end() is None
    assert not engine.gesture_system.active
    assert engine.on_drag_start((2, 2))
