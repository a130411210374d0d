from dataclasses import dataclass, field
from typing import Hashable, List, Optional, Tuple

@dataclass(slots=True)
class Board:
    """Grid dimensions, active palette and the cell matrix.

    ``cells[row][col]`` holds the entity id of the tile in that cell, or None
    while a cascade step has left it empty. Row 0 is the top; gravity pulls
    toward ``rows - 1``.
    """
    rows: int
    cols: int
    palette: Tuple[Hashable, ...] = ()
    cells: List[List[Optional[int]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[None] * self.cols for _ in range(self.rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def occupied_count(self) -> int:
        return sum(1 for line in self.cells for ent in line if ent is not None)
