import logging
from typing import Optional, Tuple

from esper import World

from tilematch.components.gesture_state import GestureState
from tilematch.components.move import Direction, Move, Position
from tilematch.utils.world_state import get_board, get_or_create_gesture_state

logger = logging.getLogger(__name__)


def direction_for_delta(dx: float, dy: float, threshold: float) -> Direction | None:
    """Map a drag vector to a direction, or None while it is under the threshold.

    Screen space: +dx is East, +dy is South. Ties go to the vertical axis.
    """
    if max(abs(dx), abs(dy)) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.EAST if dx > 0 else Direction.WEST
    return Direction.SOUTH if dy > 0 else Direction.NORTH


class GestureSystem:
    """Turns drag-start / drag-move / drag-end into at most one move candidate.

    Only one drag is tracked at a time; a second drag-start while one is active
    is refused and leaves the active gesture untouched.
    """

    def __init__(self, world: World, threshold: float | None = None):
        self.world = world
        self.threshold = float(threshold if threshold is not None else world.config.drag_threshold)

    @property
    def state(self) -> GestureState:
        return get_or_create_gesture_state(self.world)

    @property
    def candidate(self) -> Optional[Move]:
        return self.state.candidate

    @property
    def active(self) -> bool:
        return self.state.active

    def drag_start(self, coord: Position, x: float = 0.0, y: float = 0.0) -> bool:
        state = self.state
        if state.active:
            logger.warning("drag_start at %s ignored; gesture from %s still active", coord, state.source)
            return False
        row, col = coord
        board = get_board(self.world)
        if not board.in_bounds(row, col):
            logger.debug("drag_start at %s ignored; outside board", coord)
            return False
        entity = board.cells[row][col]
        if entity is None:
            logger.debug("drag_start at %s ignored; cell is empty", coord)
            return False
        state.active_tile = entity
        state.source = (row, col)
        state.origin = (float(x), float(y))
        state.candidate = None
        return True

    def drag_move(self, dx: float, dy: float) -> Optional[Move]:
        """Recompute the candidate from a delta relative to the drag origin."""
        state = self.state
        if not state.active:
            return None
        state.candidate = self._candidate_for(state.source, dx, dy)
        return state.candidate

    def drag_move_to(self, x: float, y: float) -> Optional[Move]:
        ox, oy = self.state.origin
        return self.drag_move(x - ox, y - oy)

    def drag_end(self) -> Tuple[Optional[int], Optional[Move]]:
        """Finish the gesture, returning the tile id captured at start and the candidate."""
        state = self.state
        active_tile, candidate = state.active_tile, state.candidate
        state.clear()
        return active_tile, candidate

    def cancel(self) -> None:
        self.state.clear()

    def _candidate_for(self, source: Position, dx: float, dy: float) -> Optional[Move]:
        direction = direction_for_delta(dx, dy, self.threshold)
        if direction is None:
            return None
        move = Move(source=source, direction=direction)
        board = get_board(self.world)
        if not board.in_bounds(*move.target):
            return None
        return move
