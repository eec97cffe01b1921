"""Greedy single-step hint solver.

The solver looks at one revealed number at a time and applies the two
trivial constraint rules:

1. All mines: the hidden neighbours plus the flags add up to the number, so
   every hidden neighbour is a mine.
2. All safe: the flags alone already reach the number, so every hidden
   neighbour is safe.

When no cell on the board yields a deduction, it falls back to a uniformly
random hidden cell.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, Cell, get_neighbors, iter_cells

logger = logging.getLogger(__name__)

REVEAL = "reveal"
FLAG = "flag"

GUESS_REASON = "No certain logic found. This is a best-effort guess."


@dataclass(frozen=True)
class HintResponse:
    """A proposed move with the reasoning behind it."""

    row: int
    col: int
    action: str
    reason: str
    source: Optional[Tuple[int, int]] = None

    @property
    def is_guess(self) -> bool:
        return self.source is None


def _single_inference(board: Board, cell: Cell) -> Optional[HintResponse]:
    """Apply both rules to one revealed numbered cell."""
    neighbors = get_neighbors(board, cell.row, cell.col)
    hidden: List[Cell] = [n for n in neighbors if not n.is_revealed and not n.is_flagged]
    flagged: List[Cell] = [n for n in neighbors if n.is_flagged]

    if not hidden:
        return None

    r, c, k = cell.row, cell.col, cell.neighbor_count
    target = hidden[0]

    if len(hidden) + len(flagged) == k:
        return HintResponse(
            row=target.row,
            col=target.col,
            action=FLAG,
            reason=(
                f"Logic: Cell ({r},{c}) is a {k}. It has {len(flagged)} flags and "
                f"{len(hidden)} hidden neighbors, which exactly satisfies the count. "
                f"Thus, ({target.row},{target.col}) must be a mine."
            ),
            source=(r, c),
        )

    if len(flagged) == k:
        return HintResponse(
            row=target.row,
            col=target.col,
            action=REVEAL,
            reason=(
                f"Logic: Cell ({r},{c}) is a {k}. It already has {len(flagged)} flags "
                f"around it, so ({target.row},{target.col}) and every other adjacent "
                f"hidden cell is safe."
            ),
            source=(r, c),
        )

    return None


def get_algorithmic_hint(
    board: Board, rng: Optional[random.Random] = None
) -> Optional[HintResponse]:
    """
    Propose the next move for the given board.

    Scans revealed non-zero cells in row-major order and returns the first
    deduction found. Without one, proposes revealing a random hidden,
    unflagged cell.

    Args:
        board: Current board snapshot.
        rng: Random source for the fallback guess; a fresh unseeded generator
            if omitted.

    Returns:
        The hint, or None when every cell is revealed or flagged.
    """
    for cell in iter_cells(board):
        if not cell.is_revealed or cell.is_mine or cell.neighbor_count == 0:
            continue
        hint = _single_inference(board, cell)
        if hint is not None:
            logger.debug(
                "Hint %s (%d, %d) from (%d, %d)",
                hint.action, hint.row, hint.col, cell.row, cell.col,
            )
            return hint

    candidates = [
        cell for cell in iter_cells(board) if not cell.is_revealed and not cell.is_flagged
    ]
    if not candidates:
        return None

    if rng is None:
        rng = random.Random()
    choice = rng.choice(candidates)
    logger.debug("No deduction available; guessing (%d, %d)", choice.row, choice.col)
    return HintResponse(row=choice.row, col=choice.col, action=REVEAL, reason=GUESS_REASON)
