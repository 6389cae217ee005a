"""
Tests for mnk_engine.games.geometry

Tests cell/bit helpers and precomputed win masks.
"""

import numpy as np
import pytest

from mnk_engine.games.geometry import (
    cell_bit,
    cells_of,
    get_geometry,
    in_bounds,
    line_windows,
)


class TestCellHelpers:
    """in_bounds / cell_bit / cells_of tests."""

    @pytest.mark.parametrize("row,col,expected", [
        (0, 0, True),
        (2, 3, True),
        (-1, 0, False),
        (0, -1, False),
        (3, 0, False),
        (0, 4, False),
    ])
    def test_in_bounds(self, row, col, expected):
        """Only cells inside a 3x4 board are in bounds."""
        assert in_bounds(3, 4, row, col) is expected

    def test_cell_bit_row_major(self):
        """Bit index is row * n + col."""
        assert cell_bit(4, 0, 0) == 1
        assert cell_bit(4, 0, 3) == 1 << 3
        assert cell_bit(4, 2, 1) == 1 << 9

    def test_cells_of_inverts_cell_bit(self):
        """Decoding a union of cell bits gives back the cells."""
        cells = {(0, 1), (2, 2), (1, 0)}
        mask = 0
        for row, col in cells:
            mask |= cell_bit(3, row, col)
        assert cells_of(mask, 3) == frozenset(cells)

    def test_cells_of_empty(self):
        """An empty mask has no cells."""
        assert cells_of(0, 3) == frozenset()


class TestLineWindows:
    """line_windows tests."""

    def test_tic_tac_toe_lines(self):
        """3x3, k=3 has 3 rows, 3 columns and 2 diagonals."""
        lines = line_windows(3, 3, 3)
        assert lines.shape == (8, 3)
        as_sets = {tuple(sorted(line)) for line in lines.tolist()}
        assert (0, 1, 2) in as_sets
        assert (0, 3, 6) in as_sets
        assert (0, 4, 8) in as_sets
        assert (2, 4, 6) in as_sets

    def test_short_direction_contributes_nothing(self):
        """On a 1x5 board only horizontal lines exist."""
        lines = line_windows(1, 5, 3)
        assert lines.shape == (3, 3)
        assert lines.tolist() == [[0, 1, 2], [1, 2, 3], [2, 3, 4]]

    def test_no_lines_possible(self):
        """Returns an empty (0, k) array when no direction fits."""
        lines = line_windows(2, 2, 3)
        assert lines.shape == (0, 3)
        assert isinstance(lines, np.ndarray)


class TestGetGeometry:
    """get_geometry tests."""

    def test_mask_count(self):
        """4x4, k=3: 8 horizontal, 8 vertical, 8 diagonal."""
        assert len(get_geometry(4, 4, 3).win_masks) == 24

    def test_masks_have_k_bits(self):
        """Every win mask covers exactly k cells."""
        for mask in get_geometry(5, 4, 3).win_masks:
            assert bin(mask).count("1") == 3

    def test_shared_per_dimensions(self):
        """Same (m, n, k) returns the same object."""
        assert get_geometry(3, 3, 3) is get_geometry(3, 3, 3)

    def test_masks_through_centre(self):
        """The centre of 3x3 lies on a row, a column and both diagonals."""
        geometry = get_geometry(3, 3, 3)
        assert len(geometry.masks_through[4]) == 4
        assert len(geometry.masks_through[1]) == 2

    def test_masks_through_cover_cell(self):
        """Every mask listed for a cell contains that cell's bit."""
        geometry = get_geometry(4, 5, 3)
        for index, masks in enumerate(geometry.masks_through):
            assert all(mask >> index & 1 for mask in masks)

    def test_k_one_deduplicated(self):
        """With k=1 each cell is one line, not one per direction."""
        geometry = get_geometry(2, 3, 1)
        assert len(geometry.win_masks) == 6

    def test_full_mask(self):
        """full_mask has one bit per cell."""
        geometry = get_geometry(3, 4, 3)
        assert geometry.full_mask == (1 << 12) - 1
        assert geometry.num_cells == 12
