import logging
from typing import Optional, Tuple

from esper import World

from tilematch.components.move import Move
from tilematch.errors import StaleTileError
from tilematch.systems.board_ops import swap
from tilematch.utils.world_state import get_board

logger = logging.getLogger(__name__)


class SwapSystem:
    """Validates a finished gesture's move and commits it to the board.

    Every in-bounds swap is committed whether or not it lines up a match;
    there is no revert-on-no-match rule.
    """

    def __init__(self, world: World):
        self.world = world

    def commit(self, move: Optional[Move], active_tile: Optional[int] = None) -> Optional[Tuple[int, int]]:
        if move is None:
            return None
        board = get_board(self.world)
        target = move.target
        if not board.in_bounds(*target):
            # Unreachable for gesture-produced moves; treated like no candidate.
            logger.debug("move %s targets %s outside the board", move, target)
            return None
        row, col = move.source
        if active_tile is not None and board.cells[row][col] != active_tile:
            raise StaleTileError(
                f"tile {active_tile} is no longer at {move.source}; board holds {board.cells[row][col]}"
            )
        swapped = swap(self.world, move.source, target)
        logger.debug("swapped %s <-> %s", move.source, target)
        return swapped
