"""
NumPy utilities shared by the board games.

Bounds checks, ray walking and contiguous-run counting. Everything here
is a total function: out-of-bounds coordinates give empty results, never
an error.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

import numpy as np

# Direction vectors (dr, dc)
ORTHOGONAL = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ALL_DIRS = ORTHOGONAL + DIAGONAL

# One vector per axis; the opposite direction is walked by negating it
LINE_AXES = ((0, 1), (1, 0), (1, 1), (1, -1))


def in_bounds(board: np.ndarray, r: int, c: int) -> bool:
    """Return True if (r, c) is inside the board."""
    rows, cols = board.shape[:2]
    return 0 <= r < rows and 0 <= c < cols


def walk(board: np.ndarray, r: int, c: int, dr: int, dc: int) -> Iterator[Tuple[int, int]]:
    """Yield cells from (r+dr, c+dc) outward until the edge of the board."""
    r, c = r + dr, c + dc
    while in_bounds(board, r, c):
        yield r, c
        r += dr
        c += dc


def run_length(board: np.ndarray, r: int, c: int, dr: int, dc: int, value: int) -> int:
    """Count contiguous cells equal to `value` walking away from (r, c)."""
    count = 0
    for nr, nc in walk(board, r, c, dr, dc):
        if board[nr, nc] != value:
            break
        count += 1
    return count


def connected(board: np.ndarray, r: int, c: int, length: int) -> bool:
    """
    Return True if the piece at (r, c) is part of a line of at least
    `length` equal cells along a row, column or either diagonal.

    Walks outward from the placed cell in both directions of each axis
    and sums the two runs.
    """
    value = board[r, c]
    if value == 0:
        return False
    for dr, dc in LINE_AXES:
        total = 1 + run_length(board, r, c, dr, dc, value) + run_length(board, r, c, -dr, -dc, value)
        if total >= length:
            return True
    return False


def neighbours(board: np.ndarray, r: int, c: int) -> List[Tuple[int, int]]:
    """The up-to-8 in-bounds cells surrounding (r, c)."""
    return [(r + dr, c + dc) for dr, dc in ALL_DIRS if in_bounds(board, r + dr, c + dc)]


def board_full(board: np.ndarray) -> bool:
    """Return True if no cell is empty (0)."""
    return not np.any(board == 0)
