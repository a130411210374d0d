from dataclasses import dataclass
from typing import Hashable, Tuple

@dataclass(slots=True)
class TileKind:
    """Per-tile kind assignment.

    ``kind`` is an opaque palette entry; tiles of equal kind are interchangeable
    for matching. Presentation data (texture, color) is keyed by kind or tile id
    outside the core.
    """
    kind: Hashable


@dataclass(frozen=True, slots=True)
class Tile:
    """Immutable view of one tile handed to event subscribers."""
    id: int
    kind: Hashable
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """Full board contents at a single point in time, row-major."""
    rows: int
    cols: int
    palette: Tuple[Hashable, ...]
    tiles: Tuple[Tile, ...]

    def kinds(self) -> list[list[Hashable]]:
        grid: list[list[Hashable]] = [[None] * self.cols for _ in range(self.rows)]
        for tile in self.tiles:
            grid[tile.row][tile.col] = tile.kind
        return grid
