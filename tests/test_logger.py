"""Logging setup tests."""

from __future__ import annotations

import logging

from swapmeter.logging.logger import ColorFormatter, get_logger, init_logging


def _record(level: int, message: str) -> logging.LogRecord:
    record = logging.LogRecord("swapmeter.test", level, __file__, 1, message, None, None)
    record.created = 0.0
    record.msecs = 5.0
    return record


class TestColorFormatter:

    def test_plain_line(self):
        line = ColorFormatter(use_color=False).format(_record(logging.WARNING, "[PRICE][FETCH] slow"))

        assert line == "1970-01-01 00:00:00.005+0000 ⚠️ WARNING  swapmeter.test - [PRICE][FETCH] slow"

    def test_colored_line_keeps_message(self):
        line = ColorFormatter(use_color=True).format(_record(logging.ERROR, "boom"))

        assert "\033[31m" in line
        assert line.endswith("- boom\033[0m")


class TestLoggers:

    def test_names_are_mapped_into_namespace(self):
        assert get_logger("tests.module").name == "swapmeter.tests.module"
        assert get_logger("swapmeter.core.networks").name == "swapmeter.core.networks"

    def test_init_logging_installs_one_handler(self):
        init_logging()
        init_logging()

        marked = [h for h in logging.getLogger().handlers if getattr(h, "_swapmeter_handler", False)]
        assert len(marked) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
