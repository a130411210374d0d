from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Position = Tuple[int, int]


class Direction(Enum):
    """Unit step on the grid as (row delta, col delta)."""
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def drow(self) -> int:
        return self.value[0]

    @property
    def dcol(self) -> int:
        return self.value[1]


@dataclass(frozen=True, slots=True)
class Move:
    source: Position
    direction: Direction

    @property
    def target(self) -> Position:
        row, col = self.source
        return row + self.direction.drow, col + self.direction.dcol
