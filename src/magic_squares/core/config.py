# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Configuration Manager
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Dataclass-based configuration with env var, YAML, and profile support.

Usage::

    config = MagicConfig.from_env()
    config = MagicConfig.from_yaml("config.yaml")
    config = MagicConfig.from_profile("strict")
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass

import yaml

# Grids are stored as uint32, so order² must stay below 2**32.
UINT32_SAFE_MAX_ORDER = 65535
DEFAULT_MAX_ORDER = 7000


@dataclass
class MagicConfig:
    """Central configuration for Magic Squares.

    Parameters
    ----------
    max_order : int — soft cap bounding memory and time per square.
    hard_max_order : int — overflow cap; at most 65535.
    self_check : bool — verify every generated square before returning it.
    seed : int | None — explicit seed for the default sequence source.
    batch_max_concurrency : int — worker threads for batch verification.
    batch_trials : int — squares generated per order in a batch run.
    batch_min_order : int — first order of a default batch run.
    batch_max_order : int — last order of a default batch run.
    metrics_enabled : bool — enable in-process metrics collection.
    log_level : str — logging level.
    log_json : bool — structured JSON logging.
    """

    # Limits
    max_order: int = DEFAULT_MAX_ORDER
    hard_max_order: int = UINT32_SAFE_MAX_ORDER

    # Generation
    self_check: bool = False
    seed: int | None = None

    # Batch
    batch_max_concurrency: int = 4
    batch_trials: int = 100
    batch_min_order: int = 1
    batch_max_order: int = 100

    # Observability
    metrics_enabled: bool = True
    log_level: str = "INFO"
    log_json: bool = False

    # Profile name (informational)
    profile: str = "default"

    def __post_init__(self) -> None:
        if not (1 <= self.hard_max_order <= UINT32_SAFE_MAX_ORDER):
            raise ValueError(
                f"hard_max_order must be in [1, {UINT32_SAFE_MAX_ORDER}], "
                f"got {self.hard_max_order}"
            )
        if not (1 <= self.max_order <= self.hard_max_order):
            raise ValueError(
                f"max_order must be in [1, hard_max_order={self.hard_max_order}], "
                f"got {self.max_order}"
            )
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be >= 0, got {self.seed}")
        if self.batch_max_concurrency < 1:
            raise ValueError(
                f"batch_max_concurrency must be >= 1, got {self.batch_max_concurrency}"
            )
        if self.batch_trials < 1:
            raise ValueError(f"batch_trials must be >= 1, got {self.batch_trials}")
        if self.batch_min_order < 1:
            raise ValueError(
                f"batch_min_order must be >= 1, got {self.batch_min_order}"
            )
        if self.batch_max_order < self.batch_min_order:
            raise ValueError(
                f"batch_max_order ({self.batch_max_order}) must be "
                f">= batch_min_order ({self.batch_min_order})"
            )
        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ValueError(f"unknown log_level {self.log_level!r}")

    @classmethod
    def from_env(cls, prefix: str = "MAGIC_SQUARES_") -> MagicConfig:
        """Load configuration from environment variables.

        Reads ``MAGIC_SQUARES_<FIELD>`` env vars (case-insensitive field
        matching).  Example: ``MAGIC_SQUARES_MAX_ORDER=500``
        """
        kwargs: dict = {}
        field_map = {f.name.upper(): f for f in cls.__dataclass_fields__.values()}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            field_name = key[len(prefix) :]
            if field_name in field_map:
                fld = field_map[field_name]
                try:
                    kwargs[fld.name] = _coerce(value, fld.type)  # type: ignore[arg-type]
                except (ValueError, TypeError) as exc:
                    raise ValueError(
                        f"Invalid value for env var {key}={value!r}: {exc}"
                    ) from exc

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str) -> MagicConfig:
        """Load configuration from a YAML (or JSON) file.

        Unknown keys are ignored; a file without a mapping yields defaults.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return cls()
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_profile(cls, name: str) -> MagicConfig:
        """Load a predefined profile.

        Profiles
        --------
        - ``"interactive"`` — small squares only (order <= 100).
        - ``"strict"`` — every generated square is verified.
        - ``"batch"`` — wide verification sweeps on 8 workers.
        - ``"unbounded"`` — soft cap raised to the overflow cap.
        """
        profiles: dict[str, dict] = {
            "interactive": {
                "max_order": 100,
                "metrics_enabled": False,
                "profile": "interactive",
            },
            "strict": {
                "self_check": True,
                "profile": "strict",
            },
            "batch": {
                "self_check": False,
                "batch_max_concurrency": 8,
                "batch_trials": 100,
                "batch_max_order": 100,
                "profile": "batch",
            },
            "unbounded": {
                "max_order": UINT32_SAFE_MAX_ORDER,
                "profile": "unbounded",
            },
        }
        if name not in profiles:
            raise ValueError(
                f"Unknown profile '{name}'. Choose from: {list(profiles.keys())}"
            )
        return cls(**profiles[name])

    def configure_logging(self) -> None:
        """Apply log_level and log_json to the MagicSquares logger hierarchy."""
        root = logging.getLogger("MagicSquares")
        root.setLevel(getattr(logging, self.log_level.upper(), logging.INFO))

        if self.log_json:
            handler = logging.StreamHandler()
            handler.setFormatter(_JsonFormatter())
            root.handlers = [handler]

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return {fld: getattr(self, fld) for fld in self.__dataclass_fields__}


class _JsonFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        order = getattr(record, "order", None)
        if order is not None:
            entry["order"] = order
        return json.dumps(entry)


def _coerce(value: str, type_hint: str) -> object:
    """Coerce a string env var to the target type."""
    if type_hint == "bool":
        low = value.lower()
        if low in ("true", "1", "yes"):
            return True
        if low in ("false", "0", "no"):
            return False
        raise ValueError(
            f"invalid bool value: {value!r} (expected true/false/1/0/yes/no)"
        )
    if type_hint in ("int", "int | None"):
        if type_hint == "int | None" and value.lower() in ("", "none"):
            return None
        return int(value)
    if type_hint == "float":
        return float(value)
    return value
