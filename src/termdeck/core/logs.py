"""Diagnostic logging — the console owns the terminal, so records go to a file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from termdeck.core.config import get_log_path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(config: dict[str, Any], log_path: Path | None = None) -> logging.Logger:
    """Attach a file handler to the ``termdeck`` logger.

    Calling this twice replaces the previous handler instead of stacking a
    second one.
    """
    logger = logging.getLogger("termdeck")
    level_name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    path = log_path or get_log_path(config)
    path.parent.mkdir(parents=True, exist_ok=True)

    for handler in list(logger.handlers):
        if getattr(handler, "_termdeck", False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._termdeck = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.propagate = False
    return logger
