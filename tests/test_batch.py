# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Batch Verification Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import asyncio

import numpy as np
import pytest

from magic_squares.core import batch as batch_module
from magic_squares.core.batch import (
    BatchReport,
    BatchVerifier,
    OrderResult,
    worker_seed,
)
from magic_squares.core.config import MagicConfig
from magic_squares.core.generators import MagicGenerator
from magic_squares.core.metrics import metrics


@pytest.fixture
def verifier():
    """BatchVerifier with a fixed seed and a few trials per order."""
    return BatchVerifier(max_concurrency=3, trials=5, seed=1234)


class TestBatchVerifier:
    def test_empty_batch(self, verifier):
        report = verifier.run([])
        assert isinstance(report, BatchReport)
        assert report.total == 0
        assert report.succeeded == 0
        assert report.failed == 0
        assert report.all_valid

    def test_small_orders(self, verifier):
        report = verifier.run(range(1, 13))
        assert report.total == 12
        assert report.failed == 0
        assert report.skipped == 1
        assert report.succeeded == 11
        for r in report.results:
            if r.order != 2:
                assert r.valid == r.trials == 5
                assert 1 <= r.unique_variations <= 5

    def test_order_2_is_skipped_not_failed(self, verifier):
        (result,) = verifier.run([2]).results
        assert result.skipped
        assert result.ok
        assert result.trials == 0

    def test_results_sorted_by_order(self, verifier):
        report = verifier.run([9, 1, 6, 4, 3])
        assert [r.order for r in report.results] == [1, 3, 4, 6, 9]

    def test_order_1_has_one_variation(self, verifier):
        (result,) = verifier.run([1]).results
        assert result.unique_variations == 1

    def test_resource_limit_reported_as_failure(self):
        cfg = MagicConfig(max_order=5)
        report = BatchVerifier(cfg, trials=2, seed=1).run([3, 8])
        assert report.failed == 1
        failed = [r for r in report.results if not r.ok]
        assert failed[0].order == 8
        assert "resource limit" in failed[0].error
        assert not report.all_valid

    def test_zero_order_is_failure(self, verifier):
        (result,) = verifier.run([0]).results
        assert not result.ok
        assert not result.skipped

    def test_default_orders_from_config(self):
        cfg = MagicConfig(batch_min_order=3, batch_max_order=6, batch_trials=2)
        verifier = BatchVerifier(cfg, seed=0)
        report = verifier.run()
        assert [r.order for r in report.results] == [3, 4, 5, 6]
        assert all(r.trials == 2 for r in report.results)

    def test_same_seed_same_variation_counts(self):
        a = BatchVerifier(trials=8, seed=99, max_concurrency=2).run(range(3, 11))
        b = BatchVerifier(trials=8, seed=99, max_concurrency=2).run(range(3, 11))
        assert [r.unique_variations for r in a.results] == [
            r.unique_variations for r in b.results
        ]

    def test_broken_generator_is_caught(self, monkeypatch, verifier):
        class Broken(MagicGenerator):
            def generate(self, order):
                return np.ones(order * order, dtype=np.uint32)

        monkeypatch.setattr(batch_module, "select_generator", lambda n, rng: Broken(rng))
        (result,) = verifier.run([5]).results
        assert not result.ok
        assert result.valid == 0
        assert "invalid square" in result.error

    def test_duration_recorded(self, verifier):
        report = verifier.run([3, 4])
        assert report.duration_seconds >= 0.0
        assert all(r.duration_seconds >= 0.0 for r in report.results)

    @pytest.mark.parametrize("trials", [0, -5])
    def test_non_positive_trials_rejected(self, trials):
        with pytest.raises(ValueError, match="trials"):
            BatchVerifier(trials=trials, seed=1)

    @pytest.mark.parametrize("workers", [0, -1])
    def test_non_positive_concurrency_rejected(self, workers):
        with pytest.raises(ValueError, match="max_concurrency"):
            BatchVerifier(max_concurrency=workers, seed=1)

    def test_explicit_values_override_config(self):
        cfg = MagicConfig(batch_trials=50, batch_max_concurrency=6)
        verifier = BatchVerifier(cfg, trials=1, max_concurrency=1, seed=1)
        assert verifier.trials == 1
        assert verifier.max_concurrency == 1

    def test_none_falls_back_to_config(self):
        cfg = MagicConfig(batch_trials=7, batch_max_concurrency=2)
        verifier = BatchVerifier(cfg, seed=1)
        assert verifier.trials == 7
        assert verifier.max_concurrency == 2

    def test_gauge_restored_after_run(self, verifier):
        before = metrics.get_metrics()["gauges"]["active_batches"]
        verifier.run([3])
        assert metrics.get_metrics()["gauges"]["active_batches"] == before


class TestBatchAsync:
    def test_async_matches_sync(self):
        orders = [8, 3, 5, 2, 6]
        sync_report = BatchVerifier(trials=4, seed=7).run(orders)
        async_report = asyncio.run(
            BatchVerifier(trials=4, seed=7).run_async(orders, max_concurrency=2)
        )
        assert [r.order for r in async_report.results] == [2, 3, 5, 6, 8]
        assert async_report.failed == 0
        assert async_report.skipped == 1
        assert async_report.total == sync_report.total

    def test_async_gauge_restored_and_summary_logged(self, caplog):
        before = metrics.get_metrics()["gauges"]["active_batches"]
        with caplog.at_level("INFO", logger="MagicSquares.Batch"):
            report = asyncio.run(BatchVerifier(trials=2, seed=3).run_async([3, 4]))
        assert report.succeeded == 2
        assert metrics.get_metrics()["gauges"]["active_batches"] == before
        assert any("Batch of 2 orders" in r.getMessage() for r in caplog.records)

    def test_async_rejects_zero_concurrency(self):
        with pytest.raises(ValueError, match="max_concurrency"):
            asyncio.run(BatchVerifier(trials=1, seed=1).run_async([3], max_concurrency=0))


class TestWorkerSeed:
    def test_distinct_per_worker_and_order(self):
        seeds = {worker_seed(42, w, n) for w in range(4) for n in range(1, 50)}
        assert len(seeds) == 4 * 49

    def test_fits_64_bits(self):
        assert 0 <= worker_seed(2**64 - 1, 10**6, 65535) < 2**64


class TestOrderResult:
    def test_ok_requires_every_trial(self):
        assert OrderResult(order=3, trials=4, valid=4).ok
        assert not OrderResult(order=3, trials=4, valid=3).ok
        assert not OrderResult(order=3, trials=4, valid=4, error="boom").ok

    def test_zero_trials_is_not_ok(self):
        assert not OrderResult(order=3, trials=0, valid=0).ok

    def test_skipped_is_ok_without_trials(self):
        assert OrderResult(order=2, skipped=True, error="impossible").ok
