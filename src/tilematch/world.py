import random

from esper import World

from tilematch.components.board import Board
from tilematch.components.gesture_state import GestureState
from tilematch.components.turn_state import TurnState
from tilematch.config import EngineConfig


def create_world(config: EngineConfig | None = None, *, rng: random.Random | None = None) -> World:
    """Build an empty world holding the board and per-engine singleton state.

    Tiles are not placed here; BoardSystem.initialize() fills the grid.
    """
    config = config or EngineConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)

    world.create_entity(Board(rows=config.rows, cols=config.cols, palette=config.palette))
    world.create_entity(TurnState())
    world.create_entity(GestureState())
    return world
