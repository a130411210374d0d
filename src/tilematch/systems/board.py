import logging
from typing import Hashable, Sequence

from esper import World

from tilematch.components.tile import BoardSnapshot, Tile
from tilematch.events.bus import EventBus, EVENT_TILES_INITIALIZED
from tilematch.errors import ConfigurationError
from tilematch.systems.board_ops import apply_layout, board_snapshot, generate_layout, tile_at, validate_layout
from tilematch.systems.match import find_runs
from tilematch.utils.world_state import get_board

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns grid population: the match-free initial fill and explicit layouts."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    @property
    def retry_limit(self) -> int:
        return self.world.config.generation_retry_limit

    def initialize(self) -> BoardSnapshot:
        board = get_board(self.world)
        # Build the whole layout before touching the world so a GenerationFailure leaves it unchanged.
        layout = generate_layout(board.rows, board.cols, board.palette, self.world.random, self.retry_limit)
        apply_layout(self.world, layout)
        logger.debug("initialized %dx%d board with %d kinds", board.rows, board.cols, len(board.palette))
        return self._announce()

    def load_layout(self, layout: Sequence[Sequence[Hashable]], *, require_stable: bool = False) -> BoardSnapshot:
        """Replace the board with an explicit matrix of kinds.

        With ``require_stable`` a layout that already holds a run is rejected
        before the board is touched. Without it the layout is loaded as given,
        which lets tests stage a pending cascade.
        """
        layout = [list(line) for line in layout]
        if require_stable:
            validate_layout(self.world, layout)
            runs = find_runs(layout)
            if runs:
                raise ConfigurationError(f"layout is not stable: run at {runs[0]}")
        apply_layout(self.world, layout)
        return self._announce()

    def get(self, row: int, col: int) -> Tile | None:
        return tile_at(self.world, row, col)

    def snapshot(self) -> BoardSnapshot:
        return board_snapshot(self.world)

    def _announce(self) -> BoardSnapshot:
        snapshot = board_snapshot(self.world)
        self.event_bus.emit(EVENT_TILES_INITIALIZED, board=snapshot)
        return snapshot
