import logging
from typing import Dict

from esper import World

from tilematch.components.board_position import BoardPosition
from tilematch.events.bus import (
    EventBus,
    EVENT_BOARD_STABLE,
    EVENT_COLUMN_COMPACTED,
    EVENT_TILES_REMOVED,
    EVENT_TILES_SPAWNED,
)
from tilematch.systems.board_ops import compact_column, remove_at, spawn
from tilematch.systems.match import find_matches
from tilematch.utils.world_state import get_or_create_turn_state

logger = logging.getLogger(__name__)


class CascadeSystem:
    """Runs detect -> remove -> compact -> refill until the board is stable.

    One call to resolve() is a single transaction: every event it emits is
    sent synchronously, in order, before it returns, and nothing outside can
    observe the board between steps.

    Each step removes at least three tiles, so a step is always progress; the
    loop ends as soon as a detection pass comes back empty.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def resolve(self) -> int:
        """Run the cascade to completion; returns the number of steps taken."""
        state = get_or_create_turn_state(self.world)
        state.cascade_active = True
        state.cascade_depth = 0
        try:
            while self.step():
                pass
        finally:
            state.cascade_active = False
        logger.debug("board stable after %d cascade step(s)", state.cascade_depth)
        self.event_bus.emit(EVENT_BOARD_STABLE, cascades=state.cascade_depth)
        return state.cascade_depth

    def step(self) -> bool:
        """Run one detect/remove/compact/spawn step; False when nothing matched."""
        matches = find_matches(self.world)
        if not matches:
            return False
        state = get_or_create_turn_state(self.world)
        state.cascade_depth += 1
        depth = state.cascade_depth

        removed_per_column: Dict[int, int] = {}
        for entity in sorted(matches):
            position: BoardPosition = self.world.component_for_entity(entity, BoardPosition)
            col = position.col
            remove_at(self.world, (position.row, col))
            removed_per_column[col] = removed_per_column.get(col, 0) + 1
        logger.debug("cascade step %d removed %d tile(s)", depth, len(matches))
        self.event_bus.emit(EVENT_TILES_REMOVED, ids=matches, depth=depth)

        config = self.world.config
        for col in sorted(removed_per_column):
            shift_map = compact_column(self.world, col)
            self.event_bus.emit(EVENT_COLUMN_COMPACTED, col=col, shift_map=shift_map, depth=depth)
            tiles = spawn(
                self.world,
                col,
                removed_per_column[col],
                self.world.random,
                config.generation_retry_limit,
            )
            self.event_bus.emit(EVENT_TILES_SPAWNED, col=col, tiles=tiles, depth=depth)
        return True
