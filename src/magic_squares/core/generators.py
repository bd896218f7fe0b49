# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Construction Algorithms
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
The three classical constructions, one per order class.

- ``OddGenerator``: Siamese (De La Loubère) walk split into two
  orthogonal layers, each optionally relabelled.
- ``SinglyEvenGenerator``: Conway's LUX method on top of an odd square
  of half the order.
- ``DoublyEvenGenerator``: sequential fill with block-diagonal
  complements, followed by random grid symmetries.

Every generator borrows the ``Lcg`` it is constructed with and draws
from it sequentially; nested constructions hand the same source down
explicitly, so one source must never be shared between threads.
Generators assume a valid order (see ``selector.check_order``).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from .rng import Lcg
from .types import GRID_DTYPE

logger = logging.getLogger("MagicSquares.Generator")

LUX_L = "L"
LUX_U = "U"
LUX_X = "X"

# Offsets added to a block's start value, as (top-left, top-right,
# bottom-left, bottom-right).
_LUX_OFFSETS: dict[str, tuple[int, int, int, int]] = {
    LUX_L: (3, 0, 1, 2),
    LUX_U: (0, 3, 1, 2),
    LUX_X: (0, 3, 2, 1),
}


class MagicGenerator(ABC):
    """Interface shared by the three constructions."""

    kind: str = ""

    def __init__(self, rng: Lcg) -> None:
        self.rng = rng

    @abstractmethod
    def generate(self, order: int) -> np.ndarray:
        """Return a flat row-major ``uint32`` grid of length order²."""


# ── Odd order ────────────────────────────────────────────────────────


def base_arrays(order: int) -> tuple[np.ndarray, np.ndarray]:
    """Layer and cycle arrays of the Siamese walk.

    The walk starts at (0, order // 2) and steps up-right, except after
    every ``order``-th step where it moves one row down instead.  Step
    ``k = t * order + b`` therefore lands on row ``(2t - b) mod order``
    and column ``(order // 2 - t + b) mod order``; inverting that gives
    the step for every cell directly, with no occupancy tracking.

    Returns ``(layers, cycles)`` as ``order x order`` int64 arrays where
    ``layers = k // order`` and ``cycles = k % order``.
    """
    half = order // 2
    idx = np.arange(order, dtype=np.int64)
    layers = np.add.outer(idx, idx)
    layers -= half
    np.mod(layers, order, out=layers)
    cycles = 2 * layers - idx[:, None]
    np.mod(cycles, order, out=cycles)
    return layers, cycles


def is_diagonal_safe(values: np.ndarray) -> bool:
    """True when both diagonals are all-distinct or all-equal.

    Partially repeating diagonals cannot be relabelled without risking
    the diagonal sums.
    """
    order = values.shape[0]
    idx = np.arange(order)
    for diagonal in (values[idx, idx], values[idx, order - 1 - idx]):
        distinct = np.unique(diagonal).size
        if distinct not in (1, order):
            return False
    return True


def value_mapping(order: int, rng: Lcg, shuffle: bool) -> np.ndarray:
    """Permutation of ``0..order-1`` that keeps the midpoint fixed.

    Returns the identity when *shuffle* is false.
    """
    values = list(range(order))
    if shuffle:
        mid = (order - 1) // 2
        values.pop(mid)
        rng.shuffle(values)
        values.insert(mid, mid)
    return np.asarray(values, dtype=np.int64)


class OddGenerator(MagicGenerator):
    """Odd orders: two orthogonal Latin layers combined as ``N*A + B + 1``."""

    kind = "odd"

    def generate(self, order: int) -> np.ndarray:
        layers, cycles = base_arrays(order)
        safe_layers = is_diagonal_safe(layers)
        safe_cycles = is_diagonal_safe(cycles)
        logger.debug(
            "odd order %d: layer relabel=%s cycle relabel=%s",
            order,
            safe_layers,
            safe_cycles,
        )

        map_layers = value_mapping(order, self.rng, safe_layers)
        map_cycles = value_mapping(order, self.rng, safe_cycles)

        grid = map_layers[layers]
        grid *= order
        grid += map_cycles[cycles]
        grid += 1
        return grid.astype(GRID_DTYPE).ravel()


# ── Singly even order ────────────────────────────────────────────────


def lux_pattern(half: int) -> np.ndarray:
    """L/U/X tag grid for a base square of odd order *half*.

    Rows ``0..half//2`` are L, the next row U, the rest X; the centre L
    and the U below it are then swapped.
    """
    k = half // 2
    pattern = np.full((half, half), LUX_X, dtype="<U1")
    pattern[: k + 1, :] = LUX_L
    if k + 1 < half:
        pattern[k + 1, :] = LUX_U
    pattern[k, k] = LUX_U
    if k + 1 < half:
        pattern[k + 1, k] = LUX_L
    return pattern


class SinglyEvenGenerator(MagicGenerator):
    """Orders ``2 (mod 4)``: LUX expansion of an odd square of half order."""

    kind = "singly_even"

    def generate(self, order: int) -> np.ndarray:
        half = order // 2
        base = OddGenerator(self.rng).generate(half).reshape(half, half)
        pattern = lux_pattern(half)

        start = (base.astype(np.int64) - 1) * 4 + 1
        quadrants = []
        for position in range(4):
            offset = np.zeros((half, half), dtype=np.int64)
            for tag, offsets in _LUX_OFFSETS.items():
                offset[pattern == tag] = offsets[position]
            quadrants.append(start + offset)

        grid = np.empty((order, order), dtype=GRID_DTYPE)
        grid[0::2, 0::2] = quadrants[0]
        grid[0::2, 1::2] = quadrants[1]
        grid[1::2, 0::2] = quadrants[2]
        grid[1::2, 1::2] = quadrants[3]
        return grid.ravel()


# ── Doubly even order ────────────────────────────────────────────────


def is_block_diagonal(rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
    """Mask of cells on a diagonal of their 4x4 tile."""
    r4 = rows % 4
    c4 = cols % 4
    return (r4 == c4) | (r4 + c4 == 3)


class DoublyEvenGenerator(MagicGenerator):
    """Orders ``0 (mod 4)``: complement the block diagonals, then apply
    a random combination of row flip, column flip and transpose."""

    kind = "doubly_even"

    def generate(self, order: int) -> np.ndarray:
        transpose = self.rng.coin()
        flip_rows = self.rng.coin()
        flip_cols = self.rng.coin()
        logger.debug(
            "doubly even order %d: transpose=%s flip_rows=%s flip_cols=%s",
            order,
            transpose,
            flip_rows,
            flip_cols,
        )

        rows, cols = np.indices((order, order), dtype=np.int64)
        sequential = rows * order + cols + 1
        complement = order * order + 1 - sequential
        values = np.where(is_block_diagonal(rows, cols), complement, sequential)

        if flip_rows:
            values = values[::-1, :]
        if flip_cols:
            values = values[:, ::-1]
        if transpose:
            values = values.T
        return np.ascontiguousarray(values, dtype=GRID_DTYPE).ravel()
