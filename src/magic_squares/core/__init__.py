# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Core Package
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Magic square construction and verification.

Quick start::

    from magic_squares.core import generate_magic_square, verify_magic_square

    square = generate_magic_square(6)
    assert verify_magic_square(square.grid, square.order)
"""

from .batch import BatchReport, BatchVerifier, OrderResult
from .config import MagicConfig
from .exceptions import (
    InvalidOrderError,
    InvariantViolationError,
    MagicSquareError,
    OrderTooLargeError,
    ResourceLimitError,
    ValidationError,
)
from .generators import (
    DoublyEvenGenerator,
    MagicGenerator,
    OddGenerator,
    SinglyEvenGenerator,
)
from .metrics import MetricsCollector, metrics
from .rng import Lcg
from .selector import check_order, generate_magic_square, select_generator
from .types import MagicSquare, SquareReport, magic_constant
from .validator import analyse_square, verify_magic_square

__all__ = [
    "MagicSquare",
    "SquareReport",
    "magic_constant",
    "Lcg",
    "MagicGenerator",
    "OddGenerator",
    "SinglyEvenGenerator",
    "DoublyEvenGenerator",
    "check_order",
    "select_generator",
    "generate_magic_square",
    "verify_magic_square",
    "analyse_square",
    "MagicConfig",
    "BatchVerifier",
    "BatchReport",
    "OrderResult",
    "MetricsCollector",
    "metrics",
    "MagicSquareError",
    "ValidationError",
    "InvalidOrderError",
    "OrderTooLargeError",
    "ResourceLimitError",
    "InvariantViolationError",
]
