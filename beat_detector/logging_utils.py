"""Logging setup for the command-line tool.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the CLI.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_logger = logging.getLogger("beat_detector")


def setup_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """Route package logs through a single RichHandler.

    Per-beat detail is logged at DEBUG, so the CLI stays at INFO even in
    verbose mode and shows beats in its table instead.
    """
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        show_level=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    _logger.handlers[:] = [handler]
    set_log_level(level)


def set_log_level(level: str) -> None:
    """Set package log level (DEBUG/INFO/WARNING/ERROR)."""
    level_name = (level or "INFO").upper()
    _logger.setLevel(getattr(logging, level_name, logging.INFO))


def get_log_level() -> str:
    """Return current package log level name."""
    return logging.getLevelName(_logger.level)
