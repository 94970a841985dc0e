"""Logging configuration for CircuitSnips.

Every module logs under ``circuitsnips.<name>``. The schematic transforms
log at DEBUG (forms removed, snippets wrapped), while verdicts, stored
previews and import decisions are logged at INFO. A schematic that
sexpdata cannot parse is a WARNING. Records go to stderr and, when
configured, to the log file under the data directory, never to stdout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "circuitsnips"


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """Configure logging to stderr and optionally to a file.

    The stdio MCP transport owns stdout, so log output never goes there.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the circuitsnips namespace."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
