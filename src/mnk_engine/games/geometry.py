"""
Board geometry for m,n,k games - win-line bitmasks and cell/bit helpers.

Cell (row, col) maps to bit ``row * n + col``. Every k-length line (rows,
columns, both diagonal directions) is precomputed once per (m, n, k) with
NumPy sliding windows and shared by all states of that geometry.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


def in_bounds(m: int, n: int, row: int, col: int) -> bool:
    """Return True if (row, col) is inside an m x n board."""
    return 0 <= row < m and 0 <= col < n


def cell_bit(n: int, row: int, col: int) -> int:
    """Single-bit mask for (row, col) on a board with n columns."""
    return 1 << (row * n + col)


def cells_of(mask: int, n: int) -> FrozenSet[Tuple[int, int]]:
    """Decode a bitmask into the set of (row, col) cells it covers."""
    cells = set()
    index = 0
    while mask:
        if mask & 1:
            cells.add(divmod(index, n))
        mask >>= 1
        index += 1
    return frozenset(cells)


def line_windows(m: int, n: int, k: int) -> np.ndarray:
    """
    Cell indices of every k-length line, shape (num_lines, k).

    Order: rows, columns, main diagonals, anti-diagonals. Directions whose
    extent is shorter than k contribute nothing.
    """
    idx = np.arange(m * n).reshape(m, n)
    lines: List[np.ndarray] = []

    if k <= n:
        lines.append(sliding_window_view(idx, (1, k)).reshape(-1, k))
    if k <= m:
        lines.append(sliding_window_view(idx, (k, 1)).reshape(-1, k))
    if k <= m and k <= n:
        blocks = sliding_window_view(idx, (k, k))
        lines.append(np.diagonal(blocks, axis1=2, axis2=3).reshape(-1, k))
        lines.append(np.diagonal(blocks[..., ::-1], axis1=2, axis2=3).reshape(-1, k))

    if not lines:
        return np.empty((0, k), dtype=idx.dtype)
    return np.concatenate(lines)


@dataclass(frozen=True)
class BoardGeometry:
    """Precomputed win masks for one (m, n, k)."""

    m: int
    n: int
    k: int
    win_masks: Tuple[int, ...]
    masks_through: Tuple[Tuple[int, ...], ...]  # cell index -> masks covering it
    full_mask: int

    @property
    def num_cells(self) -> int:
        return self.m * self.n


@lru_cache(maxsize=None)
def get_geometry(m: int, n: int, k: int) -> BoardGeometry:
    """Build (once) and return the shared geometry for an m x n board, k in a row."""
    windows = line_windows(m, n, k)
    masks = [sum(1 << int(i) for i in line) for line in windows]
    # k == 1 makes every direction yield the same single-cell lines
    win_masks = tuple(dict.fromkeys(masks))

    through: List[List[int]] = [[] for _ in range(m * n)]
    for mask in win_masks:
        for index in range(m * n):
            if mask >> index & 1:
                through[index].append(mask)

    return BoardGeometry(
        m=m,
        n=n,
        k=k,
        win_masks=win_masks,
        masks_through=tuple(tuple(ms) for ms in through),
        full_mask=(1 << (m * n)) - 1,
    )
