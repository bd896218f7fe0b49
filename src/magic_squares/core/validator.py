# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Validator
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Independent checks for candidate grids.

``verify_magic_square`` knows nothing about how a grid was produced and
accepts any flat (or N x N) integer sequence.  It never raises.
``analyse_square`` reports what exactly is wrong with a grid.
"""

from __future__ import annotations

import logging
import numbers

import numpy as np

from .exceptions import ValidationError
from .types import SquareReport, magic_constant

logger = logging.getLogger("MagicSquares.Validator")


def _as_matrix(grid: object, order: object) -> np.ndarray | None:
    """Coerce *grid* to an ``order x order`` int64 matrix, or ``None``."""
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        return None
    n = int(order)
    if n < 1:
        return None
    try:
        raw = np.asarray(grid)
        if raw.dtype.kind == "O":
            raw = raw.astype(np.int64)
    except (TypeError, ValueError, OverflowError):
        return None
    if raw.dtype.kind not in "iu" or raw.size != n * n:
        return None
    if raw.ndim not in (1, 2) or (raw.ndim == 2 and raw.shape != (n, n)):
        return None
    if raw.dtype.kind == "u" and raw.size and int(raw.max()) > np.iinfo(np.int64).max:
        return None
    return raw.astype(np.int64).reshape(n, n)


def verify_magic_square(grid: object, order: object) -> bool:
    """True iff *grid* is a magic square of *order* over exactly 1..order².

    Checks length, every row, every column, both diagonals and the value
    set, short-circuiting on the first failure.
    """
    matrix = _as_matrix(grid, order)
    if matrix is None:
        return False
    n = matrix.shape[0]
    target = magic_constant(n)

    if np.any(matrix.sum(axis=1) != target):
        return False
    if np.any(matrix.sum(axis=0) != target):
        return False
    if int(np.trace(matrix)) != target:
        return False
    if int(np.trace(matrix[:, ::-1])) != target:
        return False
    values = np.sort(matrix, axis=None)
    return bool(np.array_equal(values, np.arange(1, n * n + 1, dtype=np.int64)))


def analyse_square(grid: object, order: object) -> SquareReport:
    """Line sums and value-set defects of *grid*.

    Raises ``ValidationError`` when *grid* cannot be read as an
    ``order x order`` integer matrix.
    """
    matrix = _as_matrix(grid, order)
    if matrix is None:
        raise ValidationError(
            f"grid is not an {order!r}x{order!r} integer matrix"
        )
    n = matrix.shape[0]
    limit = n * n

    flat = matrix.ravel()
    counts = np.bincount(np.clip(flat, 0, limit + 1), minlength=limit + 2)
    counts = counts[1 : limit + 1]
    stray = np.unique(flat[(flat < 1) | (flat > limit)])

    report = SquareReport(
        order=n,
        magic_constant=magic_constant(n),
        row_sums=[int(s) for s in matrix.sum(axis=1)],
        column_sums=[int(s) for s in matrix.sum(axis=0)],
        diagonal_sums=[int(np.trace(matrix)), int(np.trace(matrix[:, ::-1]))],
        missing=(np.flatnonzero(counts == 0) + 1).tolist(),
        duplicates=(np.flatnonzero(counts > 1) + 1).tolist(),
        out_of_range=stray.tolist(),
    )
    if not report.is_magic:
        logger.debug("Order %d grid is not magic: %s", n, report.describe()[1:])
    return report
