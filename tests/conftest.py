# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Shared Test Fixtures
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import pytest

from magic_squares.core import Lcg, MagicConfig, MetricsCollector

CLASSIC_3 = [8, 1, 6, 3, 5, 7, 4, 9, 2]
DURER_4 = [16, 3, 2, 13, 5, 10, 11, 8, 9, 6, 7, 12, 4, 15, 14, 1]


@pytest.fixture
def rng():
    """Sequence source with a fixed seed."""
    return Lcg(seed=12345)


@pytest.fixture
def config():
    """Default configuration."""
    return MagicConfig()


@pytest.fixture
def strict_config():
    """Configuration that verifies every generated square."""
    return MagicConfig.from_profile("strict")


@pytest.fixture
def collector():
    """Fresh MetricsCollector for each test."""
    return MetricsCollector()


@pytest.fixture
def classic_3():
    """The Lo Shu square, row-major."""
    return list(CLASSIC_3)


@pytest.fixture
def durer_4():
    """Dürer's Melencolia square, row-major."""
    return list(DURER_4)
