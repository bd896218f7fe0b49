# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Shared Types
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

from __future__ import annotations

import json
from dataclasses import dataclass, field

import numpy as np

GRID_DTYPE = np.uint32


def magic_constant(order: int) -> int:
    """Return ``M = N(N² + 1) / 2`` as an exact Python integer."""
    return order * (order * order + 1) // 2


def construction_kind(order: int) -> str:
    """Name of the construction used for *order*."""
    if order % 2 == 1:
        return "odd"
    if order % 4 != 0:
        return "singly_even"
    return "doubly_even"


@dataclass
class MagicSquare:
    """A generated square: flat row-major ``uint32`` grid of length order²."""

    order: int
    grid: np.ndarray

    def __post_init__(self) -> None:
        # reshape yields a new view; the caller's array stays writable
        grid = np.asarray(self.grid, dtype=GRID_DTYPE).reshape(-1)
        grid.setflags(write=False)
        self.grid = grid

    @property
    def magic_constant(self) -> int:
        return magic_constant(self.order)

    @property
    def kind(self) -> str:
        return construction_kind(self.order)

    def rows(self) -> np.ndarray:
        """2-D read-only view of the grid."""
        return self.grid.reshape(self.order, self.order)

    def cell(self, row: int, col: int) -> int:
        return int(self.grid[row * self.order + col])

    def to_list(self) -> list[list[int]]:
        return self.rows().tolist()

    def to_json(self) -> str:
        payload = {
            "order": self.order,
            "magic_constant": self.magic_constant,
            "grid": self.to_list(),
        }
        return json.dumps(payload)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MagicSquare):
            return NotImplemented
        return self.order == other.order and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash((self.order, self.grid.tobytes()))


@dataclass
class SquareReport:
    """Per-line sums and value-set defects of a candidate grid."""

    order: int
    magic_constant: int
    row_sums: list[int] = field(default_factory=list)
    column_sums: list[int] = field(default_factory=list)
    diagonal_sums: list[int] = field(default_factory=list)  # [main, anti]
    missing: list[int] = field(default_factory=list)
    duplicates: list[int] = field(default_factory=list)
    out_of_range: list[int] = field(default_factory=list)

    @property
    def bad_rows(self) -> list[int]:
        return [i for i, s in enumerate(self.row_sums) if s != self.magic_constant]

    @property
    def bad_columns(self) -> list[int]:
        return [
            i for i, s in enumerate(self.column_sums) if s != self.magic_constant
        ]

    @property
    def is_magic(self) -> bool:
        target = self.magic_constant
        return (
            not self.bad_rows
            and not self.bad_columns
            and all(s == target for s in self.diagonal_sums)
            and not self.missing
            and not self.duplicates
            and not self.out_of_range
        )

    def describe(self) -> list[str]:
        """Human-readable lines for every defect found."""
        lines = [f"Target constant: {self.magic_constant}"]
        for i in self.bad_rows:
            lines.append(f"Row {i}: {self.row_sums[i]}")
        for i in self.bad_columns:
            lines.append(f"Column {i}: {self.column_sums[i]}")
        for name, total in zip(("Main diagonal", "Anti-diagonal"), self.diagonal_sums):
            if total != self.magic_constant:
                lines.append(
                    f"{name}: {total} (diff {total - self.magic_constant:+d})"
                )
        if self.missing:
            lines.append(f"Missing values: {_preview(self.missing)}")
        if self.duplicates:
            lines.append(f"Duplicated values: {_preview(self.duplicates)}")
        if self.out_of_range:
            lines.append(f"Out-of-range values: {_preview(self.out_of_range)}")
        return lines


def _preview(values: list[int], limit: int = 10) -> str:
    shown = ", ".join(str(v) for v in values[:limit])
    if len(values) > limit:
        shown += f", ... ({len(values)} total)"
    return shown
