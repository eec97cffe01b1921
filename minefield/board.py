"""Board data model, board factory and snapshot helpers."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Tuple

from .utils import check_bounds, get_neighborhoods


@dataclass(frozen=True)
class Cell:
    """A single board cell. Instances are immutable; updates go through ``replace``."""

    row: int
    col: int
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    neighbor_count: int = 0
    exploded: bool = False


# Row-major grid of cells. Never mutated in place.
Board = Tuple[Tuple[Cell, ...], ...]


@dataclass(frozen=True)
class DifficultySettings:
    """
    Board dimensions and mine count for one game.

    Raises:
        ValueError: If a dimension or the mine count is non-positive, or if the
            mines would not leave room for the 3x3 first-click safe zone.
    """

    rows: int
    cols: int
    mines: int

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if self.mines <= 0:
            raise ValueError("mines must be positive.")
        if self.mines >= self.rows * self.cols - 9:
            raise ValueError(
                f"A {self.rows}x{self.cols} board holds fewer than "
                f"{self.mines} mines outside the first-click safe zone."
            )

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of non-mine cells; revealing all of them wins the game."""
        return self.rows * self.cols - self.mines


class Difficulty(Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


DIFFICULTIES: Dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(rows=9, cols=9, mines=10),
    Difficulty.MEDIUM: DifficultySettings(rows=16, cols=16, mines=40),
    Difficulty.HARD: DifficultySettings(rows=16, cols=30, mines=99),
}


def create_empty_board(settings: DifficultySettings) -> Board:
    """Return a rows x cols board with no mines, flags or revealed cells."""
    return tuple(
        tuple(Cell(row=r, col=c) for c in range(settings.cols))
        for r in range(settings.rows)
    )


def board_from_mines(
    rows: int, cols: int, mines: Iterable[Tuple[int, int]]
) -> Board:
    """
    Build an unrevealed board with mines at the given coordinates.

    Every non-mine cell gets the number of mines in its Moore neighbourhood,
    clipped at the grid boundary. Mine cells keep a count of 0.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        mines: (row, col) coordinates of the mines.

    Returns:
        The new board.

    Raises:
        ValueError: If a mine coordinate lies outside the grid.
    """
    mine_set = set(mines)
    for r, c in mine_set:
        check_bounds(rows, cols, r, c)

    neighborhoods = get_neighborhoods(rows, cols)
    grid: List[Tuple[Cell, ...]] = []
    for r in range(rows):
        row_cells: List[Cell] = []
        for c in range(cols):
            if (r, c) in mine_set:
                row_cells.append(Cell(row=r, col=c, is_mine=True))
                continue
            count = sum(1 for n in neighborhoods[(r, c)] if n in mine_set)
            row_cells.append(Cell(row=r, col=c, neighbor_count=count))
        grid.append(tuple(row_cells))
    return tuple(grid)


def board_dimensions(board: Board) -> Tuple[int, int]:
    """Return (rows, cols) of a board."""
    return len(board), len(board[0])


def get_neighbors(board: Board, row: int, col: int) -> List[Cell]:
    """Return the neighbouring cells of (row, col) in scan order."""
    rows, cols = board_dimensions(board)
    return [board[nr][nc] for nr, nc in get_neighborhoods(rows, cols)[(row, col)]]


def replace_cells(board: Board, updates: Mapping[Tuple[int, int], Cell]) -> Board:
    """
    Return a copy of ``board`` with the cells at the given coordinates swapped.

    Rows without updates are shared with the original snapshot. An empty
    ``updates`` mapping returns ``board`` itself.
    """
    if not updates:
        return board

    touched_rows = {r for r, _ in updates}
    new_rows: List[Tuple[Cell, ...]] = []
    for r, row_cells in enumerate(board):
        if r not in touched_rows:
            new_rows.append(row_cells)
            continue
        new_rows.append(
            tuple(updates.get((r, c), cell) for c, cell in enumerate(row_cells))
        )
    return tuple(new_rows)


def update_cell(board: Board, row: int, col: int, **changes: object) -> Board:
    """Return a copy of ``board`` with one cell's attributes changed."""
    cell = board[row][col]
    return replace_cells(board, {(row, col): replace(cell, **changes)})


def iter_cells(board: Board) -> Iterable[Cell]:
    """Yield every cell in row-major order."""
    for row_cells in board:
        yield from row_cells


def count_revealed(board: Board) -> int:
    return sum(1 for cell in iter_cells(board) if cell.is_revealed)


def count_flags(board: Board) -> int:
    return sum(1 for cell in iter_cells(board) if cell.is_flagged)


def mine_positions(board: Board) -> List[Tuple[int, int]]:
    """Return the (row, col) of every mine in row-major order."""
    return [(cell.row, cell.col) for cell in iter_cells(board) if cell.is_mine]


# -------------------------------------------------------------------------
# Display
# -------------------------------------------------------------------------

_ANSI_RESET = "\033[0m"
_ANSI_COORD = "\033[96m"
_ANSI_MINE = "\033[91m"


def _c(s: str) -> str:
    """Wrap string in coordinate color."""
    return f"{_ANSI_COORD}{s}{_ANSI_RESET}"


def _m(s: str) -> str:
    """Wrap string in mine color (red)."""
    return f"{_ANSI_MINE}{s}{_ANSI_RESET}"


def cell_symbol(cell: Cell, reveal_all: bool = False) -> str:
    """
    Return the plain one-character symbol for a cell.

    ``.`` hidden, ``F`` flagged, ``M`` mine, ``!`` exploded mine,
    ``0``-``8`` neighbour count.
    """
    if cell.exploded:
        return "!"
    if cell.is_flagged and not reveal_all:
        return "F"
    if cell.is_revealed or reveal_all:
        return "M" if cell.is_mine else str(cell.neighbor_count)
    return "."


def format_board(board: Board, reveal_all: bool = False, color: bool = True) -> str:
    """
    Render the board as a multi-line string for terminal display.

    Args:
        board: Board snapshot to render.
        reveal_all: If True, show mines and all underlying counts.
        color: If False, omit ANSI escape codes.

    Returns:
        A formatted multi-line string with row/column labels and the grid.
    """
    rows, cols = board_dimensions(board)
    coord = _c if color else str
    mine = _m if color else str

    def cell_str(cell: Cell) -> str:
        s = cell_symbol(cell, reveal_all=reveal_all)
        return mine(s) if s in ("M", "!") else s

    # Header: column indices
    header_cells = " ".join(f"{c:2d}" for c in range(cols))
    out = [coord("   ") + coord(header_cells)]

    # Separator line
    out.append(coord("   " + "-" * (3 * cols - 1)))

    # Rows with row index at left
    for r in range(rows):
        row_cells = " ".join(f" {cell_str(board[r][c])}" for c in range(cols))
        out.append(coord(f"{r:2d} ") + coord("|") + row_cells)

    return "\n".join(out)
