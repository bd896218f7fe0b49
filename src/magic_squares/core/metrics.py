# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Metrics & Observability
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Prometheus-style metrics collection.

Usage::

    from magic_squares.core.metrics import metrics

    metrics.inc("squares_generated_total", label="odd")
    metrics.observe("generation_duration_seconds", 0.004)
    print(metrics.prometheus_format())
"""

from __future__ import annotations

import bisect
import threading
import time
from dataclasses import dataclass, field


@dataclass
class _Counter:
    """Monotonically increasing counter."""

    value: float = 0.0
    labels: dict[str, float] = field(default_factory=dict)

    def inc(self, amount: float = 1.0, label: str = "") -> None:
        if label:
            self.labels[label] = self.labels.get(label, 0.0) + amount
        else:
            self.value += amount

    def total(self) -> float:
        return self.value + sum(self.labels.values())


GENERATION_DURATION_BUCKETS = (0.0001, 0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0)
SQUARE_ORDER_BUCKETS = (3, 5, 10, 25, 50, 100, 500, 1000, 7000, 65535)
BATCH_SIZE_BUCKETS = (1, 5, 10, 25, 50, 100, 500, 1000)


@dataclass
class _Histogram:
    """Cumulative histogram over fixed bucket bounds.

    Holds per-bucket counts and the running sum, never the samples.
    """

    buckets: tuple[float, ...] = GENERATION_DURATION_BUCKETS
    counts: list[int] = field(default_factory=list)
    count: int = 0
    total: float = 0.0

    def __post_init__(self) -> None:
        self.counts = [0] * len(self.buckets)

    def observe(self, value: float) -> None:
        self.count += 1
        self.total += value
        i = bisect.bisect_left(self.buckets, value)
        if i < len(self.counts):
            self.counts[i] += 1

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0

    def cumulative(self) -> list[tuple[str, int]]:
        """``(le, count)`` pairs ending with ``+Inf``."""
        running = 0
        pairs = []
        for bound, n in zip(self.buckets, self.counts):
            running += n
            pairs.append((str(bound), running))
        pairs.append(("+Inf", self.count))
        return pairs

    def clear(self) -> None:
        self.counts = [0] * len(self.buckets)
        self.count = 0
        self.total = 0.0


@dataclass
class _Gauge:
    """Point-in-time gauge value."""

    value: float = 0.0

    def inc(self, amount: float = 1.0) -> None:
        self.value += amount

    def dec(self, amount: float = 1.0) -> None:
        self.value -= amount


class MetricsCollector:
    """Thread-safe metrics collector with Prometheus-compatible output."""

    _METRIC_HELP: dict[str, str] = {
        "squares_generated_total": "Squares generated, by construction",
        "verifications_total": "Squares passed through the validator",
        "verifications_failed": "Squares rejected by the validator",
        "invariant_violations_total": "Generated squares that were not magic",
        "generation_duration_seconds": "Time to construct one square",
        "square_order": "Requested square orders",
        "batch_size": "Orders per batch run",
        "active_batches": "Batch runs in progress",
    }

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._lock = threading.Lock()
        self._counters: dict[str, _Counter] = {
            "squares_generated_total": _Counter(),
            "verifications_total": _Counter(),
            "verifications_failed": _Counter(),
            "invariant_violations_total": _Counter(),
        }
        self._histograms: dict[str, _Histogram] = {
            "generation_duration_seconds": _Histogram(
                buckets=GENERATION_DURATION_BUCKETS
            ),
            "square_order": _Histogram(buckets=SQUARE_ORDER_BUCKETS),
            "batch_size": _Histogram(buckets=BATCH_SIZE_BUCKETS),
        }
        self._gauges: dict[str, _Gauge] = {
            "active_batches": _Gauge(),
        }

    def inc(self, name: str, amount: float = 1.0, label: str = "") -> None:
        """Increment a counter."""
        if not self.enabled:
            return
        with self._lock:
            if name not in self._counters:
                self._counters[name] = _Counter()
            self._counters[name].inc(amount, label)

    def observe(self, name: str, value: float) -> None:
        """Record a histogram observation."""
        if not self.enabled:
            return
        with self._lock:
            if name not in self._histograms:
                self._histograms[name] = _Histogram()
            self._histograms[name].observe(value)

    def gauge_inc(self, name: str, amount: float = 1.0) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._gauges.setdefault(name, _Gauge()).inc(amount)

    def gauge_dec(self, name: str, amount: float = 1.0) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._gauges.setdefault(name, _Gauge()).dec(amount)

    def timer(self, histogram_name: str) -> _Timer:
        """Context manager that records elapsed time to a histogram."""
        return _Timer(self, histogram_name)

    def get_metrics(self) -> dict:
        """Return all metrics as a plain dict."""
        with self._lock:
            result: dict = {"counters": {}, "histograms": {}, "gauges": {}}
            for name, c in self._counters.items():
                result["counters"][name] = {
                    "total": c.total(),
                    "labels": dict(c.labels),
                }
            for name, h in self._histograms.items():
                result["histograms"][name] = {
                    "count": h.count,
                    "total": h.total,
                    "mean": h.mean,
                    "buckets": dict(h.cumulative()),
                }
            for name, g in self._gauges.items():
                result["gauges"][name] = g.value
            return result

    def prometheus_format(self) -> str:
        """Render metrics in Prometheus text exposition format."""
        lines: list[str] = []
        with self._lock:
            for name, c in self._counters.items():
                fqn = f"magic_squares_{name}"
                lines.append(f"# HELP {fqn} {self._METRIC_HELP.get(name, name)}")
                lines.append(f"# TYPE {fqn} counter")
                if c.labels:
                    for label, val in c.labels.items():
                        lines.append(f'{fqn}{{kind="{label}"}} {val}')
                else:
                    lines.append(f"{fqn} {c.value}")
            for name, h in self._histograms.items():
                fqn = f"magic_squares_{name}"
                lines.append(f"# HELP {fqn} {self._METRIC_HELP.get(name, name)}")
                lines.append(f"# TYPE {fqn} histogram")
                for le, count in h.cumulative():
                    lines.append(f'{fqn}_bucket{{le="{le}"}} {count}')
                lines.append(f"{fqn}_count {h.count}")
                lines.append(f"{fqn}_sum {h.total}")
            for name, g in self._gauges.items():
                fqn = f"magic_squares_{name}"
                lines.append(f"# HELP {fqn} {self._METRIC_HELP.get(name, name)}")
                lines.append(f"# TYPE {fqn} gauge")
                lines.append(f"{fqn} {g.value}")
        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        with self._lock:
            for c in self._counters.values():
                c.value = 0.0
                c.labels.clear()
            for h in self._histograms.values():
                h.clear()
            for g in self._gauges.values():
                g.value = 0.0


class _Timer:
    """Context manager for timing operations."""

    def __init__(self, collector: MetricsCollector, name: str) -> None:
        self._collector = collector
        self._name = name
        self._start = 0.0

    def __enter__(self) -> _Timer:
        self._start = time.monotonic()
        return self

    def __exit__(self, *exc: object) -> None:
        self._collector.observe(self._name, time.monotonic() - self._start)


metrics = MetricsCollector()
