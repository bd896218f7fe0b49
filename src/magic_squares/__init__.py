# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Package Initialisation
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Magic Squares: build and check N x N magic squares.

API::

    from magic_squares import generate_magic_square, verify_magic_square

    square = generate_magic_square(10)
    verify_magic_square(square.grid, 10)   # True
"""

__version__ = "1.0.0"

from .core import (
    BatchReport,
    BatchVerifier,
    InvalidOrderError,
    InvariantViolationError,
    Lcg,
    MagicConfig,
    MagicSquare,
    MagicSquareError,
    OrderResult,
    OrderTooLargeError,
    ResourceLimitError,
    SquareReport,
    ValidationError,
    analyse_square,
    generate_magic_square,
    magic_constant,
    verify_magic_square,
)

__all__ = [
    "generate_magic_square",
    "verify_magic_square",
    "analyse_square",
    "magic_constant",
    "MagicSquare",
    "SquareReport",
    "Lcg",
    "MagicConfig",
    "BatchVerifier",
    "BatchReport",
    "OrderResult",
    "MagicSquareError",
    "ValidationError",
    "InvalidOrderError",
    "OrderTooLargeError",
    "ResourceLimitError",
    "InvariantViolationError",
]
