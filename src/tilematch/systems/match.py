from typing import FrozenSet, Hashable, List, Optional, Sequence, Tuple

from esper import World

from tilematch.constants import MIN_RUN_LENGTH
from tilematch.systems.board_ops import kind_grid
from tilematch.utils.world_state import get_board

Position = Tuple[int, int]
KindGrid = Sequence[Sequence[Optional[Hashable]]]


def _scan_line(grid: KindGrid, line: List[Position], runs: List[List[Position]]) -> None:
    run: List[Position] = []
    last_kind: Hashable = None
    for row, col in line:
        kind = grid[row][col]
        if kind is not None and run and kind == last_kind:
            run.append((row, col))
            continue
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
        # Empty cells break runs.
        run = [] if kind is None else [(row, col)]
        last_kind = kind
    if len(run) >= MIN_RUN_LENGTH:
        runs.append(run)


def find_runs(grid: KindGrid) -> List[List[Position]]:
    """Maximal horizontal then vertical runs over a matrix of kinds, as cell lists."""
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    runs: List[List[Position]] = []
    for row in range(rows):
        _scan_line(grid, [(row, col) for col in range(cols)], runs)
    for col in range(cols):
        _scan_line(grid, [(row, col) for row in range(rows)], runs)
    return runs


def find_match_runs(world: World) -> List[List[int]]:
    """Detect maximal horizontal then vertical runs of one kind, as tile id lists.

    A tile in both a row run and a column run appears in both lists.
    """
    board = get_board(world)
    return [[board.cells[row][col] for row, col in run] for run in find_runs(kind_grid(world))]


def find_matches(world: World) -> FrozenSet[int]:
    """Return the ids of every tile taking part in a run; empty when stable."""
    return frozenset(entity for run in find_match_runs(world) for entity in run)


def swap_creates_match(grid: KindGrid, a: Position, b: Position) -> bool:
    """Trial-swap two cells of a kind matrix and report whether either lands in a run."""
    if grid[a[0]][a[1]] is None or grid[b[0]][b[1]] is None:
        return False
    trial = [list(line) for line in grid]
    trial[a[0]][a[1]], trial[b[0]][b[1]] = trial[b[0]][b[1]], trial[a[0]][a[1]]
    return any(a in run or b in run for run in find_runs(trial))


def find_productive_swaps(world: World) -> List[Tuple[Position, Position]]:
    """Adjacent swaps that would create a match, row-major, east before south."""
    grid = kind_grid(world)
    board = get_board(world)
    swaps: List[Tuple[Position, Position]] = []
    for row in range(board.rows):
        for col in range(board.cols):
            for neighbour in ((row, col + 1), (row + 1, col)):
                if board.in_bounds(*neighbour) and swap_creates_match(grid, (row, col), neighbour):
                    swaps.append(((row, col), neighbour))
    return swaps
