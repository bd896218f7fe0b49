# ─────────────────────────────────────────────────────────────────────
# Magic Squares — Command Line Interface
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
CLI entry point for Magic Squares.

Usage::

    magic-squares version
    magic-squares generate 7 --seed 42
    magic-squares generate 8 --json
    magic-squares generate 10 --csv square.csv
    magic-squares verify square.json
    magic-squares batch --from 1 --to 100 --trials 100 --workers 8
    magic-squares config --profile strict
"""

from __future__ import annotations

import csv
import json
import math
import os
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point — dispatches to subcommands."""
    args = argv if argv is not None else sys.argv[1:]

    if not args or args[0] in ("-h", "--help", "help"):
        _print_help()
        return

    cmd = args[0]
    rest = args[1:]

    commands = {
        "version": _cmd_version,
        "generate": _cmd_generate,
        "verify": _cmd_verify,
        "batch": _cmd_batch,
        "config": _cmd_config,
    }

    if cmd not in commands:
        print(f"Unknown command: {cmd}")
        _print_help()
        sys.exit(1)

    commands[cmd](rest)


def _print_help() -> None:
    print(
        "Magic Squares CLI\n"
        "\n"
        "Usage: magic-squares <command> [options]\n"
        "\n"
        "Commands:\n"
        "  version                  Show version info\n"
        "  generate <N> [--seed S]  Generate and print a magic square\n"
        "           [--json] [--csv PATH]\n"
        "  verify <file.json>       Check a grid stored as JSON\n"
        "  batch [--from A] [--to B] [--trials T] [--workers W]\n"
        "                           Generate and verify many orders\n"
        "  config [--profile X]     Show configuration\n"
    )


def _option(args: list[str], name: str) -> str | None:
    if name in args:
        idx = args.index(name)
        if idx + 1 < len(args):
            return args[idx + 1]
        print(f"Error: {name} needs a value")
        sys.exit(1)
    return None


def _int_option(args: list[str], name: str, default: int | None) -> int | None:
    raw = _option(args, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"Error: {name} expects an integer, got {raw!r}")
        sys.exit(1)


def _load_config():
    from magic_squares.core.config import MagicConfig
    from magic_squares.core.metrics import metrics

    config = MagicConfig.from_env()
    config.configure_logging()
    metrics.enabled = config.metrics_enabled
    return config


def _cmd_version(args: list[str]) -> None:
    import magic_squares

    print(f"magic-squares {magic_squares.__version__}")


def format_square(rows: list[list[int]]) -> str:
    """Right-aligned rows, one space wider than the largest value."""
    if not rows:
        return ""
    n = len(rows)
    width = len(str(n * n)) + 1
    return "\n".join("".join(f"{v:>{width}}" for v in row) for row in rows)


def _cmd_generate(args: list[str]) -> None:
    if not args:
        print("Usage: magic-squares generate <N> [--seed S] [--json] [--csv PATH]")
        sys.exit(1)

    try:
        order = int(args[0])
    except ValueError:
        print(f"Error: order must be an integer, got {args[0]!r}")
        sys.exit(1)

    from magic_squares.core.exceptions import MagicSquareError
    from magic_squares.core.rng import Lcg
    from magic_squares.core.selector import generate_magic_square
    from magic_squares.core.validator import verify_magic_square

    config = _load_config()
    seed = _int_option(args, "--seed", config.seed)
    if seed is not None and seed < 0:
        print("Error: --seed must be >= 0")
        sys.exit(1)
    csv_path = _option(args, "--csv")

    try:
        square = generate_magic_square(order, rng=Lcg(seed), config=config)
    except MagicSquareError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if "--json" in args:
        print(square.to_json())
    else:
        print(format_square(square.to_list()))

    if csv_path:
        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(square.to_list())

    if verify_magic_square(square.grid, square.order):
        if "--json" not in args:
            print("\nVerified: This is a valid magic square.")
    else:
        print("\nError: The generated square is invalid!")
        sys.exit(2)
    if csv_path:
        print(f"Square written to {csv_path}")


_VERIFY_MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MB


def _cmd_verify(args: list[str]) -> None:
    """Check a JSON grid: a list of rows, or ``{"order": N, "grid": [...]}``."""
    if not args:
        print("Usage: magic-squares verify <file.json>")
        sys.exit(1)

    input_file = args[0]
    if not os.path.isfile(input_file):
        print(f"Error: file not found: {input_file}")
        sys.exit(1)

    file_size = os.path.getsize(input_file)
    if file_size > _VERIFY_MAX_FILE_SIZE:
        print(
            f"Error: file too large ({file_size / 1024 / 1024:.1f} MB, "
            f"limit {_VERIFY_MAX_FILE_SIZE // 1024 // 1024} MB)"
        )
        sys.exit(1)

    with open(input_file, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            print(f"Error: malformed JSON: {e}")
            sys.exit(1)

    if isinstance(data, dict):
        grid = data.get("grid", [])
        order = data.get("order")
    else:
        grid = data
        order = None
    if not isinstance(grid, list):
        print("Error: expected a list of rows or a flat list of integers")
        sys.exit(1)
    if order is None:
        order = len(grid) if grid and isinstance(grid[0], list) else math.isqrt(len(grid))

    from magic_squares.core.exceptions import ValidationError
    from magic_squares.core.validator import analyse_square, verify_magic_square

    if verify_magic_square(grid, order):
        print(f"Valid magic square of order {order}.")
        return

    print(f"Not a magic square of order {order}.")
    try:
        report = analyse_square(grid, order)
    except ValidationError as e:
        print(f"  {e}")
    else:
        for line in report.describe():
            print(f"  {line}")
    sys.exit(1)


def _cmd_batch(args: list[str]) -> None:
    from magic_squares.core.batch import BatchVerifier

    config = _load_config()
    low = _int_option(args, "--from", config.batch_min_order)
    high = _int_option(args, "--to", config.batch_max_order)
    trials = _int_option(args, "--trials", config.batch_trials)
    workers = _int_option(args, "--workers", config.batch_max_concurrency)
    seed = _int_option(args, "--seed", config.seed)
    if trials < 1 or workers < 1:
        print("Error: --trials and --workers must be >= 1")
        sys.exit(1)

    print(
        f"Running Verification for Orders {low} to {high} "
        f"({trials} samples each)..."
    )
    verifier = BatchVerifier(config, max_concurrency=workers, trials=trials, seed=seed)
    report = verifier.run(range(low, high + 1))

    for r in report.results:
        if r.skipped:
            print(f"Order {r.order}: Impossible (Skipping)")
        elif r.ok:
            print(
                f"Order {r.order}: {r.valid}/{r.trials} Valid. "
                f"Unique Variations: {r.unique_variations}"
            )
        else:
            print(f"Order {r.order}: FAILED VALIDATION ({r.error})")

    print(f"Duration: {report.duration_seconds:.2f}s")
    if not report.all_valid:
        sys.exit(1)


def _cmd_config(args: list[str]) -> None:
    from magic_squares.core.config import MagicConfig

    if "--profile" in args:
        idx = args.index("--profile")
        if idx + 1 < len(args):
            try:
                cfg = MagicConfig.from_profile(args[idx + 1])
            except ValueError as e:
                print(f"Error: {e}")
                sys.exit(1)
        else:
            print("Usage: magic-squares config --profile <name>")
            sys.exit(1)
    else:
        cfg = MagicConfig.from_env()

    for key, value in cfg.to_dict().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
