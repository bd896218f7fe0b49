# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Exception Hierarchy
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Structured exception hierarchy for Magic Squares.

All library-specific exceptions descend from ``MagicSquareError`` so
callers can catch the entire family with a single except clause.
Input problems derive from ``ValidationError``; a square that fails
its own verification raises ``InvariantViolationError``, which is
deliberately outside the validation branch.
"""


class MagicSquareError(Exception):
    """Base exception for all Magic Squares errors."""


class ValidationError(MagicSquareError, ValueError):
    """Raised for invalid inputs (orders, grids, configs)."""


class InvalidOrderError(ValidationError):
    """Raised for orders with no magic square (0, 2) or non-integer orders."""

    def __init__(self, order, reason: str = ""):
        self.order = order
        detail = reason or "no magic square exists for this order"
        super().__init__(f"Invalid order {order!r}: {detail}")


class OrderTooLargeError(ValidationError):
    """Raised when order² would not fit an unsigned 32-bit cell."""

    def __init__(self, order: int, limit: int):
        self.order = order
        self.limit = limit
        super().__init__(
            f"Order {order} exceeds the overflow-safe maximum of {limit}"
        )


class ResourceLimitError(ValidationError):
    """Raised when the order is arithmetically safe but above the soft cap."""

    def __init__(self, order: int, limit: int):
        self.order = order
        self.limit = limit
        super().__init__(
            f"Order {order} exceeds the configured resource limit of {limit} "
            f"({order * order} cells requested, at most {limit * limit} allowed)"
        )


class InvariantViolationError(MagicSquareError):
    """Raised when a constructor returns a grid that fails verification."""

    def __init__(self, order: int, square=None, detail: str = ""):
        self.order = order
        self.square = square
        msg = f"Generated square of order {order} failed verification"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
