# swapmeter/logging/logger.py
from __future__ import annotations

import logging
import sys
import time
from typing import Dict, Optional, Tuple

from swapmeter.configuration.config import settings

APP_NAMESPACE = "swapmeter"

_RESET = "\033[0m"
_DIM = "\033[2m"

# level -> (emoji, ANSI color)
_LEVEL_STYLES: Dict[str, Tuple[str, str]] = {
    "DEBUG": ("🔍", "\033[36m"),
    "INFO": ("ℹ️", "\033[32m"),
    "WARNING": ("⚠️", "\033[33m"),
    "ERROR": ("❌", "\033[31m"),
    "CRITICAL": ("🛑", "\033[35m"),
}

_HANDLER_MARKER = "_swapmeter_handler"


def _level_from_str(value: Optional[str]) -> int:
    level = logging.getLevelName((value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _library_levels() -> Dict[str, str]:
    """Third-party loggers that talk too much at DEBUG, with their configured level."""
    return {
        "httpx": settings.LOG_LEVEL_LIB_HTTPX,
        "httpcore": settings.LOG_LEVEL_LIB_HTTPCORE,
        "asyncio": settings.LOG_LEVEL_LIB_ASYNCIO,
        "web3": settings.LOG_LEVEL_LIB_WEB3,
    }


def _canonical_name(name: str) -> str:
    if name == APP_NAMESPACE or name.startswith(APP_NAMESPACE + "."):
        return name
    return f"{APP_NAMESPACE}.{name}"


class ColorFormatter(logging.Formatter):
    """
    One line per record: UTC timestamp, level emoji, padded level, logger name, message.

      2026-10-19 01:36:22.123+0000 ℹ️ INFO     swapmeter.integrations.pricing.price_client - [PRICE][FETCH] ...

    Colors are only emitted when `use_color` is set; tracebacks follow on the next lines.
    """
    converter = time.gmtime
    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = "%s.%03d+0000"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level_name = record.levelname.upper()
        emoji, color = _LEVEL_STYLES.get(level_name, ("", ""))
        timestamp = self.formatTime(record)
        message = record.getMessage()

        if self.use_color:
            line = (f"{_DIM}{timestamp}{_RESET} {color}{emoji} {level_name:<8}{_RESET} "
                    f"{record.name} {_DIM}- {message}{_RESET}")
        else:
            line = f"{timestamp} {emoji} {level_name:<8} {record.name} - {message}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _install_console_handler(root: logging.Logger) -> logging.Handler:
    """Add the stderr handler once; later calls reuse it."""
    for handler in root.handlers:
        if getattr(handler, _HANDLER_MARKER, False):
            return handler

    handler = logging.StreamHandler(stream=sys.stderr)
    setattr(handler, _HANDLER_MARKER, True)
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(ColorFormatter(use_color=sys.stderr.isatty() and not settings.NO_COLOR))
    root.addHandler(handler)
    return handler


def init_logging() -> None:
    """
    Configure the root logger for the CLI and library users who want our format.

    Root follows LOG_LEVEL, the 'swapmeter' namespace follows LOG_LEVEL_SWAPMETER and
    each chatty dependency follows its own LOG_LEVEL_LIB_* setting. Safe to call twice.
    """
    root = logging.getLogger()
    root.setLevel(_level_from_str(settings.LOG_LEVEL))
    _install_console_handler(root)

    logging.getLogger(APP_NAMESPACE).setLevel(_level_from_str(settings.LOG_LEVEL_SWAPMETER))
    for library, level in _library_levels().items():
        logging.getLogger(library).setLevel(_level_from_str(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the canonical 'swapmeter.*' namespace."""
    return logging.getLogger(_canonical_name(name or __name__))
