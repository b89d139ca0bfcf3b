"""Logging configuration for cardflow."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from textual.logging import TextualHandler

LOGGER_NAME = "cardflow"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_for(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    return logging.INFO


def setup_logging(verbose: int = 0, log_file: Path | None = None, tui: bool = False) -> None:
    """Configure the ``cardflow`` logger.

    Logging stays off unless ``verbose`` or ``log_file`` asks for it.

    Args:
        verbose: 0 silent, 1 info, 2 or more debug
        log_file: File that also receives log records
        tui: Route console logging to the Textual devtools console instead
            of stderr, which the running app owns
    """
    if verbose == 0 and log_file is None:
        return

    level = _level_for(verbose)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup replaces earlier handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if verbose > 0:
        console: logging.Handler = TextualHandler() if tui else logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info("cardflow starting | %s | level=%s", timestamp, logging.getLevelName(level))
    logger.info("=" * 60)
