"""Rules engine: mine placement, flood-fill and chord reveal, flags and win detection.

Every function takes a board snapshot and returns a new one (or the same
object when nothing changes). None of them keep state between calls.
"""

import logging
import random
from dataclasses import replace
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

from .board import (
    Board,
    Cell,
    DifficultySettings,
    board_dimensions,
    board_from_mines,
    count_revealed,
    get_neighbors,
    iter_cells,
    replace_cells,
)
from .utils import check_bounds, get_neighborhoods

logger = logging.getLogger(__name__)


class ChordResult(NamedTuple):
    board: Board
    hit_mine: bool


def initialize_game(
    settings: DifficultySettings,
    first_row: int,
    first_col: int,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Place mines for a new game so that the first click and its neighbours are safe.

    Mines are sampled uniformly without replacement from every cell outside
    the 3x3 zone centred on the first click, then neighbour counts are
    computed for all non-mine cells.

    Args:
        settings: Board dimensions and mine count.
        first_row: Row of the first revealed cell.
        first_col: Column of the first revealed cell.
        rng: Random source; a fresh unseeded generator if omitted.

    Returns:
        An unrevealed board holding exactly ``settings.mines`` mines.

    Raises:
        ValueError: If the first click is outside the board.
    """
    check_bounds(settings.rows, settings.cols, first_row, first_col)
    if rng is None:
        rng = random.Random()

    # Safe zone = first click + its neighbours.
    safe: Set[Tuple[int, int]] = set(
        get_neighborhoods(settings.rows, settings.cols)[(first_row, first_col)]
    ) | {(first_row, first_col)}

    # Eligible cells = all cells not in the safe zone.
    eligible: List[Tuple[int, int]] = [
        (r, c)
        for r in range(settings.rows)
        for c in range(settings.cols)
        if (r, c) not in safe
    ]

    mines = rng.sample(eligible, settings.mines)
    logger.debug(
        "Placed %d mines on %dx%d board, first click (%d, %d)",
        len(mines), settings.rows, settings.cols, first_row, first_col,
    )
    return board_from_mines(settings.rows, settings.cols, mines)


def reveal_cell(board: Board, row: int, col: int) -> Board:
    """
    Reveal (row, col) and flood-fill outward through zero-count cells.

    Uses an explicit stack over the 8-neighbourhood. Revealed and flagged
    cells are left alone. The starting cell is assumed not to be a mine;
    callers handle mine clicks before calling this.

    Args:
        board: Current board snapshot.
        row: Row of the cell to reveal.
        col: Column of the cell to reveal.

    Returns:
        A new board with every affected cell revealed, or ``board`` itself if
        nothing changed.

    Raises:
        ValueError: If the coordinates are outside the board.
    """
    rows, cols = board_dimensions(board)
    check_bounds(rows, cols, row, col)
    neighborhoods = get_neighborhoods(rows, cols)

    revealed: Dict[Tuple[int, int], Cell] = {}
    stack: List[Tuple[int, int]] = [(row, col)]

    while stack:
        r, c = stack.pop()
        if (r, c) in revealed:
            continue
        cell = board[r][c]
        if cell.is_revealed or cell.is_flagged:
            continue

        revealed[(r, c)] = replace(cell, is_revealed=True)

        if cell.neighbor_count == 0 and not cell.is_mine:
            for nr, nc in neighborhoods[(r, c)]:
                if not board[nr][nc].is_revealed and (nr, nc) not in revealed:
                    stack.append((nr, nc))

    if revealed:
        logger.debug("Revealed %d cells from (%d, %d)", len(revealed), row, col)
    return replace_cells(board, revealed)


def chord_reveal(board: Board, row: int, col: int) -> ChordResult:
    """
    Reveal every hidden neighbour of a numbered cell whose flags match its number.

    Only applies to a revealed cell with a non-zero count whose flagged
    neighbour count equals that count exactly; otherwise the original board
    is returned with ``hit_mine`` False. Neighbours are visited in scan
    order and the first mine stops the walk: cells before it stay revealed,
    cells after it stay hidden.

    Raises:
        ValueError: If the coordinates are outside the board.
    """
    rows, cols = board_dimensions(board)
    check_bounds(rows, cols, row, col)

    cell = board[row][col]
    if not cell.is_revealed or cell.neighbor_count == 0:
        return ChordResult(board, False)

    neighbors = get_neighbors(board, row, col)
    flag_count = sum(1 for n in neighbors if n.is_flagged)
    if flag_count != cell.neighbor_count:
        return ChordResult(board, False)

    current = board
    for n in neighbors:
        if n.is_revealed or n.is_flagged:
            continue
        if n.is_mine:
            logger.debug("Chord at (%d, %d) hit a mine", row, col)
            return ChordResult(current, True)
        current = reveal_cell(current, n.row, n.col)

    return ChordResult(current, False)


def find_chord_mine(board: Board, row: int, col: int) -> Optional[Tuple[int, int]]:
    """
    Locate the mine a chord at (row, col) runs into.

    Re-scans the neighbourhood in the same order as ``chord_reveal`` and
    returns the first unflagged, unrevealed mine, or None.
    """
    rows, cols = board_dimensions(board)
    check_bounds(rows, cols, row, col)
    for n in get_neighbors(board, row, col):
        if n.is_mine and not n.is_flagged and not n.is_revealed:
            return n.row, n.col
    return None


def toggle_flag(board: Board, row: int, col: int) -> Board:
    """Flip the flag on a hidden cell. Revealed cells cannot be flagged."""
    rows, cols = board_dimensions(board)
    check_bounds(rows, cols, row, col)
    cell = board[row][col]
    if cell.is_revealed:
        return board
    return replace_cells(
        board, {(row, col): replace(cell, is_flagged=not cell.is_flagged)}
    )


def mark_exploded(board: Board, row: int, col: int) -> Board:
    """Reveal the mine at (row, col) and mark it as the one that cost a life."""
    rows, cols = board_dimensions(board)
    check_bounds(rows, cols, row, col)
    cell = board[row][col]
    return replace_cells(
        board, {(row, col): replace(cell, is_revealed=True, exploded=True)}
    )


def reveal_all_mines(board: Board) -> Board:
    """Reveal every mine on the board, as shown after the final loss."""
    updates = {
        (cell.row, cell.col): replace(cell, is_revealed=True)
        for cell in iter_cells(board)
        if cell.is_mine and not cell.is_revealed
    }
    return replace_cells(board, updates)


def check_win(board: Board, settings: DifficultySettings) -> bool:
    """
    Return True once the revealed-cell count reaches ``rows * cols - mines``.

    Without a revealed mine this means every non-mine cell is revealed.
    Flags play no part.

    Raises:
        ValueError: If the board dimensions do not match the settings.
    """
    if board_dimensions(board) != (settings.rows, settings.cols):
        raise ValueError("Board dimensions do not match the difficulty settings.")
    return count_revealed(board) == settings.safe_cells
