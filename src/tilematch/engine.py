"""Turn controller for one tile-matching board.

Wires the event bus, world and systems together. Each Engine instance owns
its own state, so any number of independent boards can coexist.
"""
import logging
import random
from typing import Hashable, List, Optional, Sequence, Tuple

from tilematch.components.board import Board
from tilematch.components.move import Move, Position
from tilematch.components.tile import BoardSnapshot, Tile
from tilematch.config import EngineConfig
from tilematch.events.bus import EventBus, EVENT_DRAG_END, EVENT_DRAG_MOVE, EVENT_DRAG_START
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_ops import kind_grid
from tilematch.systems.cascade import CascadeSystem
from tilematch.systems.gesture import GestureSystem
from tilematch.systems.match import find_matches, find_productive_swaps
from tilematch.systems.swap import SwapSystem
from tilematch.utils.world_state import get_board, get_or_create_turn_state
from tilematch.world import create_world

logger = logging.getLogger(__name__)


class Engine:
    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
        initialize: bool = True,
    ):
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.config, rng=rng)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.gesture_system = GestureSystem(self.world)
        self.swap_system = SwapSystem(self.world)
        self.cascade_system = CascadeSystem(self.world, self.event_bus)
        self._handlers = [
            (EVENT_DRAG_START, self._on_drag_start_event),
            (EVENT_DRAG_MOVE, self._on_drag_move_event),
            (EVENT_DRAG_END, self._on_drag_end_event),
        ]
        for name, handler in self._handlers:
            self.event_bus.subscribe(name, handler)
        if initialize:
            self.board_system.initialize()

    @property
    def board(self) -> Board:
        return get_board(self.world)

    # -- inbound gesture primitives -------------------------------------

    def on_drag_start(self, coord: Position, x: float = 0.0, y: float = 0.0) -> bool:
        return self.gesture_system.drag_start(coord, x, y)

    def on_drag_move(self, dx: float, dy: float) -> Optional[Move]:
        return self.gesture_system.drag_move(dx, dy)

    def on_drag_end(self) -> Optional[Move]:
        """Finish the gesture and, if it produced a move, play out the whole turn.

        Returns the committed move, or None when the turn was a no-op.
        """
        active_tile, move = self.gesture_system.drag_end()
        if move is None:
            return None
        return self.play(move, active_tile=active_tile)

    def play(self, move: Move, *, active_tile: Optional[int] = None) -> Optional[Move]:
        """Commit a move and resolve the resulting cascade as one transaction."""
        if self.swap_system.commit(move, active_tile=active_tile) is None:
            return None
        state = get_or_create_turn_state(self.world)
        state.turn_count += 1
        steps = self.cascade_system.resolve()
        logger.debug("turn %d: %s resolved in %d cascade step(s)", state.turn_count, move, steps)
        return move

    def _on_drag_start_event(self, sender, **payload):
        coord = payload.get("coord")
        if coord is None:
            return
        self.on_drag_start(tuple(coord), payload.get("x", 0.0), payload.get("y", 0.0))

    def _on_drag_move_event(self, sender, **payload):
        dx = payload.get("dx")
        dy = payload.get("dy")
        if dx is None or dy is None:
            return
        self.on_drag_move(dx, dy)

    def _on_drag_end_event(self, sender, **payload):
        self.on_drag_end()

    def close(self) -> None:
        """Detach from the event bus. The bus may be shared, so only this engine's handlers go."""
        for name, handler in self._handlers:
            self.event_bus.unsubscribe(name, handler)
        self._handlers = []
        self.gesture_system.cancel()

    # -- board access ----------------------------------------------------

    def reset(self) -> BoardSnapshot:
        self.gesture_system.cancel()
        return self.board_system.initialize()

    def load_layout(self, layout: Sequence[Sequence[Hashable]]) -> BoardSnapshot:
        """Load an explicit layout; raises ConfigurationError if it already holds a run."""
        self.gesture_system.cancel()
        return self.board_system.load_layout(layout, require_stable=True)

    def tile_at(self, row: int, col: int) -> Tile | None:
        return self.board_system.get(row, col)

    def snapshot(self) -> BoardSnapshot:
        return self.board_system.snapshot()

    def kinds(self) -> List[List[Hashable]]:
        return kind_grid(self.world)

    def is_stable(self) -> bool:
        return not find_matches(self.world)

    def hint(self) -> Optional[Tuple[Position, Position]]:
        """First adjacent swap that would create a match, or None."""
        swaps = find_productive_swaps(self.world)
        return swaps[0] if swaps else None
