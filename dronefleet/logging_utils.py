"""Mini README: Application-wide logging helpers for DroneFleet.

Structure:
    * get_logger - factory that configures structured logging for modules.
    * configure_root_logger - optional helper to adjust global logging level.
    * configure_file_logging - attach a timestamped file sink for audit lines.

Usage:
    Modules import ``get_logger`` to create contextual loggers that include
    module names and debugging friendly formatting. The helpers ensure that
    logging configuration is performed exactly once, preventing duplicate
    handlers when the shell is restarted inside the same interpreter.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Set

_LOGGER_INITIALISED = False
_FILE_SINKS: Set[Path] = set()
_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_root_logger(level: int = logging.INFO) -> None:
    """Configure the root logger with a rich, debugging friendly formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def configure_file_logging(path: Path, level: int = logging.INFO) -> Path:
    """Append log records to ``path`` in addition to the console handler."""

    destination = Path(path).expanduser().resolve()
    if destination in _FILE_SINKS:
        return destination

    destination.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(destination, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    logging.getLogger().addHandler(handler)
    _FILE_SINKS.add(destination)
    return destination


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
