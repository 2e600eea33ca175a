"""Logging configuration with Rich formatting.

Provides setup_logging() for CLI initialization and get_logger() for module-level loggers.
"""

import logging
from typing import Optional

from rich.logging import RichHandler
from .config import get_settings

def setup_logging(level: Optional[str] = None):
    """
    Configure the root logger. `level` (e.g. from --log-level) wins over LOG_LEVEL.
    """
    level = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)]
    )
    logging.getLogger().setLevel(level)

    # Slack SDK request logging only matters when debugging the notifier itself
    logging.getLogger("slack_sdk").setLevel(logging.DEBUG if level == "DEBUG" else logging.WARNING)

def get_logger(name: str):
    return logging.getLogger(name)
