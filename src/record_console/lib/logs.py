"""
Logging utilities for the Record Console.

Provides a simple logger factory that creates configured Python loggers
with consistent formatting across the engine, services and UI.
"""

import logging
import os
from pathlib import Path

# Default log level from environment or INFO
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the parent package and the
    module stem are used so that `engine/export.py` logs as `engine.export`.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        path = Path(name)
        name = f"{path.parent.name}.{path.stem}" if path.parent.name else path.stem

    log = logging.getLogger(name)

    # Only configure if not already configured
    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)

    return log
