from __future__ import annotations

import random
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from esper import World

from tilematch.components.board import Board
from tilematch.components.board_position import BoardPosition
from tilematch.components.tile import BoardSnapshot, Tile, TileKind
from tilematch.errors import ConfigurationError, GenerationFailure, StaleTileError
from tilematch.utils.world_state import get_board

Position = Tuple[int, int]
Layout = List[List[Hashable]]


def _check_bounds(board: Board, row: int, col: int) -> None:
    if not board.in_bounds(row, col):
        raise IndexError(f"cell {(row, col)} outside {board.rows}x{board.cols} board")


def get_entity_at(world: World, row: int, col: int) -> int | None:
    board = get_board(world)
    _check_bounds(board, row, col)
    return board.cells[row][col]


def tile_snapshot(world: World, entity: int) -> Tile:
    tile: TileKind = world.component_for_entity(entity, TileKind)
    position: BoardPosition = world.component_for_entity(entity, BoardPosition)
    return Tile(id=entity, kind=tile.kind, row=position.row, col=position.col)


def tile_at(world: World, row: int, col: int) -> Tile | None:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    return tile_snapshot(world, entity)


def kind_grid(world: World) -> Layout:
    """Return the board as a matrix of kinds (None for empty cells)."""
    board = get_board(world)
    grid: Layout = []
    for line in board.cells:
        row_kinds: List[Hashable] = []
        for entity in line:
            if entity is None:
                row_kinds.append(None)
            else:
                row_kinds.append(world.component_for_entity(entity, TileKind).kind)
        grid.append(row_kinds)
    return grid


def board_snapshot(world: World) -> BoardSnapshot:
    board = get_board(world)
    tiles = tuple(
        tile_snapshot(world, entity)
        for line in board.cells
        for entity in line
        if entity is not None
    )
    return BoardSnapshot(rows=board.rows, cols=board.cols, palette=board.palette, tiles=tiles)


def sample_kind(
    rng: random.Random,
    palette: Sequence[Hashable],
    rejected: Callable[[Hashable], bool],
    retry_limit: int,
    *,
    row: int | None = None,
    col: int | None = None,
) -> Hashable:
    """Draw uniformly from the palette until ``rejected`` accepts a sample.

    Raises GenerationFailure after ``retry_limit`` rejected samples.
    """
    for _ in range(retry_limit):
        kind = rng.choice(palette)
        if not rejected(kind):
            return kind
    raise GenerationFailure(
        f"no acceptable kind for cell {(row, col)} after {retry_limit} attempts "
        f"(palette of {len(palette)})",
        row=row,
        col=col,
        attempts=retry_limit,
    )


def generate_layout(
    rows: int,
    cols: int,
    palette: Sequence[Hashable],
    rng: random.Random,
    retry_limit: int,
) -> Layout:
    """Fill a rows x cols layout in row-major order with no run of three.

    Only already-placed neighbours are checked: the two cells to the left and
    the two cells above.
    """
    if not palette:
        raise ConfigurationError("palette must contain at least one kind")
    layout: Layout = []
    for row in range(rows):
        row_values: List[Hashable] = []
        layout.append(row_values)
        for col in range(cols):
            def completes_run(kind: Hashable, row=row, col=col, row_values=row_values) -> bool:
                if col >= 2 and row_values[col - 1] == kind and row_values[col - 2] == kind:
                    return True
                if row >= 2 and layout[row - 1][col] == kind and layout[row - 2][col] == kind:
                    return True
                return False

            row_values.append(sample_kind(rng, palette, completes_run, retry_limit, row=row, col=col))
    return layout


def place_tile(world: World, row: int, col: int, kind: Hashable) -> int:
    board = get_board(world)
    _check_bounds(board, row, col)
    if board.cells[row][col] is not None:
        raise ValueError(f"cell {(row, col)} is already occupied")
    entity = world.create_entity(TileKind(kind=kind), BoardPosition(row=row, col=col))
    board.cells[row][col] = entity
    return entity


def clear_board(world: World) -> List[int]:
    """Retire every tile on the board and return the retired ids."""
    board = get_board(world)
    retired: List[int] = []
    for row in range(board.rows):
        for col in range(board.cols):
            entity = board.cells[row][col]
            if entity is None:
                continue
            world.delete_entity(entity, immediate=True)
            board.cells[row][col] = None
            retired.append(entity)
    return retired


def validate_layout(world: World, layout: Layout) -> None:
    board = get_board(world)
    if len(layout) != board.rows or any(len(line) != board.cols for line in layout):
        raise ConfigurationError(f"layout must be {board.rows}x{board.cols}")
    palette = set(board.palette)
    for line in layout:
        for kind in line:
            if kind not in palette:
                raise ConfigurationError(f"kind {kind!r} is not in the palette")


def apply_layout(world: World, layout: Layout) -> List[int]:
    """Replace the board contents with ``layout``; returns the new ids row-major."""
    validate_layout(world, layout)
    clear_board(world)
    created: List[int] = []
    for row, line in enumerate(layout):
        for col, kind in enumerate(line):
            created.append(place_tile(world, row, col, kind))
    return created


def _require_live(world: World, board: Board, pos: Position) -> int:
    row, col = pos
    _check_bounds(board, row, col)
    entity = board.cells[row][col]
    if entity is None or not world.entity_exists(entity):
        raise StaleTileError(f"no live tile owned by the board at {pos}")
    try:
        position: BoardPosition = world.component_for_entity(entity, BoardPosition)
    except KeyError:
        raise StaleTileError(f"tile {entity} at {pos} has no board position") from None
    if (position.row, position.col) != (row, col):
        raise StaleTileError(
            f"tile {entity} claims {(position.row, position.col)} but the board holds it at {pos}"
        )
    return entity


def swap(world: World, a: Position, b: Position) -> Tuple[int, int]:
    """Exchange the tiles at a and b, both their matrix slots and positions."""
    board = get_board(world)
    ent_a = _require_live(world, board, a)
    ent_b = _require_live(world, board, b)
    pos_a: BoardPosition = world.component_for_entity(ent_a, BoardPosition)
    pos_b: BoardPosition = world.component_for_entity(ent_b, BoardPosition)
    pos_a.row, pos_b.row = pos_b.row, pos_a.row
    pos_a.col, pos_b.col = pos_b.col, pos_a.col
    board.cells[a[0]][a[1]] = ent_b
    board.cells[b[0]][b[1]] = ent_a
    return ent_a, ent_b


def remove_at(world: World, pos: Position) -> int | None:
    """Clear a cell and retire its tile id; empty cells are left alone."""
    board = get_board(world)
    row, col = pos
    _check_bounds(board, row, col)
    entity = board.cells[row][col]
    if entity is None:
        return None
    board.cells[row][col] = None
    world.delete_entity(entity, immediate=True)
    return entity


def compact_column(world: World, col: int) -> Dict[int, int]:
    """Slide occupied cells down toward the last row, keeping their order.

    Returns ``{tile_id: rows_moved}`` for every tile left in the column,
    with 0 for tiles that stayed put.
    """
    board = get_board(world)
    _check_bounds(board, 0, col)
    shifts: Dict[int, int] = {}
    write_row = board.rows - 1
    for row in range(board.rows - 1, -1, -1):
        entity = board.cells[row][col]
        if entity is None:
            continue
        if row != write_row:
            board.cells[write_row][col] = entity
            board.cells[row][col] = None
            position: BoardPosition = world.component_for_entity(entity, BoardPosition)
            position.row = write_row
        shifts[entity] = write_row - row
        write_row -= 1
    return shifts


def spawn(
    world: World,
    col: int,
    count: int,
    rng: random.Random,
    retry_limit: int,
) -> List[Tile]:
    """Create ``count`` tiles in the top cells of a compacted column.

    Vertically adjacent tiles of the new batch never share a kind; tiles
    already below the batch are not considered.
    """
    board = get_board(world)
    _check_bounds(board, 0, col)
    if count <= 0:
        return []
    if count > board.rows:
        raise ValueError(f"cannot spawn {count} tiles into a column of {board.rows}")
    for row in range(count):
        if board.cells[row][col] is not None:
            raise ValueError(f"column {col} is not compacted; cell {(row, col)} is occupied")
    spawned: List[Tile] = []
    previous: Optional[Hashable] = None
    for row in range(count):
        above = previous
        kind = sample_kind(
            rng,
            board.palette,
            lambda candidate: row > 0 and candidate == above,
            retry_limit,
            row=row,
            col=col,
        )
        entity = place_tile(world, row, col, kind)
        spawned.append(Tile(id=entity, kind=kind, row=row, col=col))
        previous = kind
    return spawned

