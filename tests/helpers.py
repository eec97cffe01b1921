from dataclasses import replace

from minefield.board import replace_cells


def with_state(board, revealed=(), flagged=()):
    """Return ``board`` with the given cells revealed and flagged."""
    updates = {}
    for r, c in revealed:
        updates[(r, c)] = replace(board[r][c], is_revealed=True)
    for r, c in flagged:
        updates[(r, c)] = replace(board[r][c], is_flagged=True)
    return replace_cells(board, updates)


def all_except(rows, cols, excluded):
    return [(r, c) for r in range(rows) for c in range(cols) if (r, c) not in excluded]
