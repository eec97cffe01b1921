"""Neighbourhood and bounds helpers shared by the board, engine and solver."""

from typing import Dict, List, Tuple

# Module-level cache: (rows, cols) -> {(r,c): ((nr,nc), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[
    Tuple[int, int],
    Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]
] = {}

# Scan order for every neighbour walk: row-major over (dr, dc), skipping (0, 0).
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


def get_neighborhoods(
    rows: int, cols: int
) -> Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]:
    """
    Precompute and cache 8-connected neighbour coordinates for every cell in a grid.

    Neighbours are listed in the deterministic scan order used by chord reveal,
    the chord mine re-scan and the hint solver.

    Args:
        rows: Number of grid rows. Must be positive.
        cols: Number of grid columns. Must be positive.

    Returns:
        Mapping from each cell (row, col) to a tuple of valid neighbouring
        coordinates (nr, nc) under 8-connectivity.

    Raises:
        ValueError: If rows or cols is non-positive.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]] = {}
    for r in range(rows):
        for c in range(cols):
            nbrs: List[Tuple[int, int]] = []
            for dr, dc in NEIGHBOR_OFFSETS:
                nr, nc = r + dr, c + dc
                if 0 <= nr < rows and 0 <= nc < cols:
                    nbrs.append((nr, nc))
            neighborhoods[(r, c)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def check_bounds(rows: int, cols: int, row: int, col: int) -> None:
    """Raise ValueError if (row, col) lies outside a rows x cols grid."""
    if row < 0 or row >= rows or col < 0 or col >= cols:
        raise ValueError(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} board."
        )
