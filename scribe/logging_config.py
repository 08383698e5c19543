"""Logging setup for scribe.

Library modules call `get_logger(__name__)` and log freely; nothing is
printed until an application (the CLI, a test, a host program) calls
`setup_logging`.
"""

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "scribe"
LOG_LEVEL_ENV = "SCRIBE_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the `scribe` hierarchy.

    Args:
        name: Usually `__name__`; names outside the package are nested under it.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(level: str | None = None, log_file: str | Path | None = None) -> logging.Logger:
    """Configure the `scribe` logger with a rich console handler.

    Args:
        level: Level name; falls back to $SCRIBE_LOG_LEVEL, then WARNING.
        log_file: Optional path that also receives plain-text records.

    Returns:
        The configured root `scribe` logger.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(numeric_level)
        logger.addHandler(file_handler)

    logger.propagate = False
    logger.debug(f"Logging configured at {level_name}")
    return logger
