"""Logging setup driven by LoggingConfig."""

from __future__ import annotations

import logging
from pathlib import Path

from smart_transit.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "smart_transit.log"

_installed_handlers: list[logging.Handler] = []


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Attach console and file handlers to the root logger.

    Calling it again replaces the handlers from the previous call.
    """
    level = logging.getLevelName(str(config.level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in (logging.StreamHandler(), logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")):
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed_handlers.append(handler)
    return logging.getLogger("smart_transit")


__all__ = ["configure_logging", "LOG_FILENAME"]
