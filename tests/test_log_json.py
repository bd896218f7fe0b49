# ─────────────────────────────────────────────────────────────────────
# Magic Squares — JSON Logging Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import json
import logging

from magic_squares.core.config import _JsonFormatter


def _record(msg, args=(), level=logging.INFO, name="MagicSquares.Test"):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestJsonFormatter:
    def test_format_produces_valid_json(self):
        output = _JsonFormatter().format(_record("order %d", (7,)))
        parsed = json.loads(output)
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "MagicSquares.Test"
        assert parsed["msg"] == "order 7"
        assert "ts" in parsed

    def test_format_includes_order(self):
        record = _record("generated", level=logging.WARNING)
        record.order = 12
        parsed = json.loads(_JsonFormatter().format(record))
        assert parsed["order"] == 12

    def test_format_omits_order_when_absent(self):
        parsed = json.loads(_JsonFormatter().format(_record("plain")))
        assert "order" not in parsed
