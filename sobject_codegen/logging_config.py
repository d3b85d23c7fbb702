"""Logging setup shared by the CLI and library modules.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach handlers to the package logger.
"""

import logging
import sys
from pathlib import Path

PACKAGE_LOGGER = "sobject_codegen"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def setup_logging(level: str | int = "WARNING", log_file: str | Path | None = None) -> None:
    """Configure handlers on the package logger.

    Args:
        level: Logging level name or number.
        log_file: Optional file receiving the same records as stderr.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Re-running setup replaces previously attached handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging configured at level %s", logging.getLevelName(level))
