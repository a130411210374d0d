from typing import Tuple

from esper import World

from tilematch.components.board import Board
from tilematch.components.gesture_state import GestureState
from tilematch.components.turn_state import TurnState


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found; create the world with create_world()")


def get_board_entity(world: World) -> Tuple[int, Board]:
    for entity, board in world.get_component(Board):
        return entity, board
    raise RuntimeError("Board component not found; create the world with create_world()")


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    existing = list(world.get_component(TurnState))
    if existing:
        return existing[0][1]
    world.create_entity(TurnState())
    return list(world.get_component(TurnState))[0][1]


def get_or_create_gesture_state(world: World) -> GestureState:
    existing = list(world.get_component(GestureState))
    if existing:
        return existing[0][1]
    world.create_entity(GestureState())
    return list(world.get_component(GestureState))[0][1]
