# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Batch Verification
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Generate and verify many squares across a range of orders in parallel.

Each order is one unit of work with its own ``Lcg``, seeded from the
run's base seed, the worker slot and the order, so no sequence source
is ever shared between threads.

Usage::

    from magic_squares.core.batch import BatchVerifier

    verifier = BatchVerifier(trials=100, max_concurrency=8)
    report = verifier.run(range(1, 101))

    # Async
    report = await verifier.run_async(range(1, 101))
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .config import MagicConfig
from .exceptions import InvalidOrderError, MagicSquareError
from .metrics import metrics
from .rng import Lcg
from .selector import check_order, select_generator
from .types import MagicSquare
from .validator import verify_magic_square

logger = logging.getLogger("MagicSquares.Batch")

_MASK64 = (1 << 64) - 1
_GOLDEN_GAMMA = 0x9E3779B97F4A7C15


def worker_seed(base_seed: int, worker: int, order: int) -> int:
    """Decorrelated seed for one (worker, order) unit."""
    mixed = base_seed + (worker + 1) * _GOLDEN_GAMMA + order * (_GOLDEN_GAMMA >> 7)
    return mixed & _MASK64


@dataclass
class OrderResult:
    """Outcome of every trial for one order."""

    order: int
    trials: int = 0
    valid: int = 0
    unique_variations: int = 0
    skipped: bool = False
    error: str = ""
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        if self.skipped:
            return True
        return not self.error and self.trials > 0 and self.valid == self.trials


@dataclass
class BatchReport:
    """Per-order results of a batch run, sorted by order."""

    results: list[OrderResult] = field(default_factory=list)
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0

    @property
    def all_valid(self) -> bool:
        return self.failed == 0

    def add(self, result: OrderResult) -> None:
        self.results.append(result)
        if result.skipped:
            self.skipped += 1
        elif result.ok:
            self.succeeded += 1
        else:
            self.failed += 1

    def finish(self, started: float) -> None:
        self.results.sort(key=lambda r: r.order)
        self.duration_seconds = time.monotonic() - started


class BatchVerifier:
    """Parallel generate-and-verify sweeps.

    Parameters
    ----------
    config : MagicConfig | None — limits and batch defaults.
    max_concurrency : int | None — worker threads (default from config).
    trials : int | None — squares per order (default from config).
    seed : int | None — base seed; defaults to ``config.seed`` or the clock.
    """

    def __init__(
        self,
        config: MagicConfig | None = None,
        max_concurrency: int | None = None,
        trials: int | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or MagicConfig()
        if max_concurrency is None:
            max_concurrency = self.config.batch_max_concurrency
        if trials is None:
            trials = self.config.batch_trials
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        if trials < 1:
            raise ValueError(f"trials must be >= 1, got {trials}")
        self.max_concurrency = max_concurrency
        self.trials = trials
        if seed is None:
            seed = self.config.seed if self.config.seed is not None else time.time_ns()
        self.seed = seed

    def default_orders(self) -> range:
        return range(self.config.batch_min_order, self.config.batch_max_order + 1)

    def run(self, orders: Iterable[int] | None = None) -> BatchReport:
        """Verify every order on a thread pool."""
        order_list = list(self.default_orders() if orders is None else orders)
        start = time.monotonic()
        metrics.observe("batch_size", float(len(order_list)))
        metrics.gauge_inc("active_batches")

        report = BatchReport(total=len(order_list))
        try:
            with ThreadPoolExecutor(max_workers=self.max_concurrency) as pool:
                futures = [
                    pool.submit(self._verify_order, i % self.max_concurrency, n)
                    for i, n in enumerate(order_list)
                ]
                for future in futures:
                    report.add(future.result())
        finally:
            metrics.gauge_dec("active_batches")

        report.finish(start)
        _log_summary(report)
        return report

    async def run_async(
        self, orders: Iterable[int] | None = None, max_concurrency: int | None = None
    ) -> BatchReport:
        """Verify every order from an event loop with bounded concurrency."""
        order_list = list(self.default_orders() if orders is None else orders)
        limit = self.max_concurrency if max_concurrency is None else max_concurrency
        if limit < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {limit}")
        start = time.monotonic()
        metrics.observe("batch_size", float(len(order_list)))
        metrics.gauge_inc("active_batches")
        sem = asyncio.Semaphore(limit)
        loop = asyncio.get_running_loop()

        report = BatchReport(total=len(order_list))

        async def _run(slot: int, order: int) -> None:
            async with sem:
                result = await loop.run_in_executor(
                    None, self._verify_order, slot, order
                )
                report.add(result)

        try:
            await asyncio.gather(
                *[_run(i % limit, n) for i, n in enumerate(order_list)]
            )
        finally:
            metrics.gauge_dec("active_batches")

        report.finish(start)
        _log_summary(report)
        return report

    def _verify_order(self, worker: int, order: int) -> OrderResult:
        """Generate ``self.trials`` squares of *order* and verify each."""
        result = OrderResult(order=order)
        started = time.monotonic()
        try:
            n = check_order(order, self.config)
        except InvalidOrderError as e:
            if order == 2:
                result.skipped = True
                result.error = "impossible"
            else:
                result.error = str(e)
            return result
        except MagicSquareError as e:
            result.error = str(e)
            logger.warning("Order %s rejected: %s", order, e)
            return result

        rng = Lcg(worker_seed(self.seed, worker, n))
        seen: set[MagicSquare] = set()
        for _ in range(self.trials):
            square = MagicSquare(order=n, grid=select_generator(n, rng).generate(n))
            result.trials += 1
            metrics.inc("squares_generated_total", label=square.kind)
            metrics.inc("verifications_total")
            if not verify_magic_square(square.grid, n):
                metrics.inc("verifications_failed")
                metrics.inc("invariant_violations_total")
                result.error = f"invalid square generated for order {n}"
                logger.warning(
                    "Order %d: invalid square generated", n, extra={"order": n}
                )
                break
            result.valid += 1
            seen.add(square)

        result.unique_variations = len(seen)
        result.duration_seconds = time.monotonic() - started
        return result


def _log_summary(report: BatchReport) -> None:
    logger.info(
        "Batch of %d orders: %d ok, %d failed, %d skipped in %.2fs",
        report.total,
        report.succeeded,
        report.failed,
        report.skipped,
        report.duration_seconds,
    )
