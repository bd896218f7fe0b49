# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Shared Types Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import json

import numpy as np
import pytest

from magic_squares.core.types import (
    MagicSquare,
    SquareReport,
    construction_kind,
    magic_constant,
)


class TestMagicConstant:
    @pytest.mark.parametrize(
        "order, expected",
        [(1, 1), (3, 15), (4, 34), (5, 65), (6, 111), (8, 260), (10, 505)],
    )
    def test_known_values(self, order, expected):
        assert magic_constant(order) == expected

    def test_largest_order_is_exact(self):
        assert magic_constant(65535) == 65535 * (65535**2 + 1) // 2
        assert magic_constant(65535) > 2**32


class TestConstructionKind:
    @pytest.mark.parametrize(
        "order, kind",
        [(1, "odd"), (7, "odd"), (6, "singly_even"), (14, "singly_even"),
         (4, "doubly_even"), (16, "doubly_even")],
    )
    def test_kinds(self, order, kind):
        assert construction_kind(order) == kind


class TestMagicSquare:
    @pytest.fixture
    def square(self, classic_3):
        return MagicSquare(order=3, grid=np.array(classic_3, dtype=np.uint32))

    def test_read_only(self, square):
        with pytest.raises(ValueError):
            square.grid[0] = 1

    def test_caller_array_stays_writable(self, classic_3):
        source = np.array(classic_3, dtype=np.uint32)
        MagicSquare(order=3, grid=source)
        source[0] = 8
        assert source.flags.writeable

    def test_list_grid_is_coerced(self, classic_3):
        square = MagicSquare(order=3, grid=classic_3)
        assert square.grid.dtype == np.uint32
        assert not square.grid.flags.writeable
        assert square.cell(0, 0) == 8

    def test_two_dimensional_grid_is_flattened(self, classic_3):
        square = MagicSquare(order=3, grid=np.array(classic_3).reshape(3, 3))
        assert square.grid.shape == (9,)
        assert square.to_list() == [[8, 1, 6], [3, 5, 7], [4, 9, 2]]

    def test_rows_and_cells(self, square):
        assert square.rows().shape == (3, 3)
        assert square.cell(0, 0) == 8
        assert square.cell(2, 1) == 9
        assert square.to_list() == [[8, 1, 6], [3, 5, 7], [4, 9, 2]]

    def test_constant_and_kind(self, square):
        assert square.magic_constant == 15
        assert square.kind == "odd"

    def test_to_json(self, square):
        payload = json.loads(square.to_json())
        assert payload == {
            "order": 3,
            "magic_constant": 15,
            "grid": [[8, 1, 6], [3, 5, 7], [4, 9, 2]],
        }

    def test_equality_and_hash(self, square, classic_3):
        other = MagicSquare(order=3, grid=np.array(classic_3, dtype=np.uint32))
        assert square == other
        assert len({square, other}) == 1
        flipped = MagicSquare(order=3, grid=np.array(classic_3[::-1], dtype=np.uint32))
        assert square != flipped


class TestSquareReport:
    def test_is_magic_requires_everything(self):
        report = SquareReport(
            order=3,
            magic_constant=15,
            row_sums=[15, 15, 15],
            column_sums=[15, 15, 15],
            diagonal_sums=[15, 15],
        )
        assert report.is_magic
        report.duplicates = [5]
        assert not report.is_magic

    def test_describe_truncates_long_lists(self):
        report = SquareReport(order=5, magic_constant=65, missing=list(range(1, 20)))
        line = report.describe()[-1]
        assert line.startswith("Missing values: 1, 2")
        assert "(19 total)" in line
