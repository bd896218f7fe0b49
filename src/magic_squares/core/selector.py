# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Order Validation & Dispatch
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Public generation entry point.

Usage::

    from magic_squares.core import generate_magic_square

    square = generate_magic_square(7)
    print(square.rows())
"""

from __future__ import annotations

import logging
import numbers

from .config import MagicConfig
from .exceptions import (
    InvalidOrderError,
    InvariantViolationError,
    OrderTooLargeError,
    ResourceLimitError,
)
from .generators import (
    DoublyEvenGenerator,
    MagicGenerator,
    OddGenerator,
    SinglyEvenGenerator,
)
from .metrics import metrics
from .rng import Lcg
from .types import MagicSquare
from .validator import analyse_square, verify_magic_square

logger = logging.getLogger("MagicSquares.Selector")

_DEFAULT_CONFIG = MagicConfig()


def check_order(order: object, config: MagicConfig | None = None) -> int:
    """Validate *order* against the mathematical and configured limits.

    Returns the order as a plain ``int``.  The overflow cap is checked
    before the resource cap so oversized orders always report overflow.
    """
    cfg = config or _DEFAULT_CONFIG
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise InvalidOrderError(order, "order must be an integer")
    n = int(order)
    if n < 1:
        raise InvalidOrderError(n, "order must be positive")
    if n == 2:
        raise InvalidOrderError(n, "order 2 magic squares are impossible")
    if n > cfg.hard_max_order:
        raise OrderTooLargeError(n, cfg.hard_max_order)
    if n > cfg.max_order:
        raise ResourceLimitError(n, cfg.max_order)
    return n


def select_generator(order: int, rng: Lcg) -> MagicGenerator:
    """Pick the construction for a valid *order*."""
    if order % 2 != 0:
        return OddGenerator(rng)
    if order % 4 != 0:
        return SinglyEvenGenerator(rng)
    return DoublyEvenGenerator(rng)


def generate_magic_square(
    order: object,
    rng: Lcg | None = None,
    config: MagicConfig | None = None,
) -> MagicSquare:
    """Build a magic square of the requested order.

    Parameters
    ----------
    order : int — side length; 0 and 2 are rejected.
    rng : Lcg | None — sequence source to draw from.  A fresh one is
        created (from ``config.seed`` or the clock) when omitted.
    config : MagicConfig | None — limits and self-check policy.

    Raises
    ------
    InvalidOrderError, OrderTooLargeError, ResourceLimitError
        Before any grid is allocated.
    InvariantViolationError
        When ``config.self_check`` is on and the result is not magic.
    """
    cfg = config or _DEFAULT_CONFIG
    n = check_order(order, cfg)
    if rng is None:
        rng = Lcg(cfg.seed)

    generator = select_generator(n, rng)
    with metrics.timer("generation_duration_seconds"):
        grid = generator.generate(n)
    square = MagicSquare(order=n, grid=grid)
    metrics.inc("squares_generated_total", label=generator.kind)
    metrics.observe("square_order", float(n))
    logger.debug(
        "Generated %s square of order %d", generator.kind, n, extra={"order": n}
    )

    if cfg.self_check:
        metrics.inc("verifications_total")
        if not verify_magic_square(square.grid, n):
            metrics.inc("verifications_failed")
            metrics.inc("invariant_violations_total")
            detail = "; ".join(analyse_square(square.grid, n).describe()[1:])
            logger.warning(
                "Invariant violation for order %d: %s", n, detail, extra={"order": n}
            )
            raise InvariantViolationError(n, square, detail)
    return square
