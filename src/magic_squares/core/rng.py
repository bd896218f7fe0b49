# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Deterministic Sequence Source
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Small linear congruential generator used to vary generated squares.

Not suitable for anything security related.  One ``Lcg`` must only be
used by one thread at a time; concurrent callers create one instance
per worker with an explicit seed.

Usage::

    rng = Lcg(seed=42)
    rng.next_range(0, 10)
    rng.shuffle(values)
"""

from __future__ import annotations

import time
from typing import MutableSequence

LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407
_MASK64 = (1 << 64) - 1


class Lcg:
    """64-bit LCG returning the high 32 bits of each new state.

    Parameters
    ----------
    seed : int | None — initial state; ``None`` seeds from the wall clock
        in nanoseconds.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self._state = int(seed) & _MASK64

    @property
    def state(self) -> int:
        return self._state

    def next_u32(self) -> int:
        """Advance the state and return its high 32 bits."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) & _MASK64
        return self._state >> 32

    def next_range(self, low: int, high: int) -> int:
        """Return a value in ``[low, high)``.

        An empty range returns ``low`` without consuming a draw.
        """
        span = high - low
        if span == 0:
            return low
        if span < 0:
            raise ValueError(f"empty range [{low}, {high})")
        return low + self.next_u32() % span

    def coin(self) -> bool:
        return self.next_range(0, 2) == 1

    def shuffle(self, items: MutableSequence) -> None:
        """In-place Fisher-Yates shuffle."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_range(0, i + 1)
            items[i], items[j] = items[j], items[i]

    def __repr__(self) -> str:
        return f"Lcg(state={self._state})"
