"""Logging utilities shared across the checkmaster package."""
from __future__ import annotations

import logging
import os

# HTTP client loggers that drown out scan results at INFO.
_CHATTY_LOGGERS = ("urllib3", "requests")


def configure_logging(level: str | None = None) -> None:
    """Initialize basic logging with a shared format and log level.

    The level comes from ``level`` or the ``LOG_LEVEL`` environment variable
    (defaults to ``INFO``). Transport libraries stay at WARNING unless the
    resolved level is DEBUG, so a scan logs one line instead of a connection
    trace.
    """

    resolved_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if resolved_level != "DEBUG":
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
