"""Logging setup.

The TUI owns the terminal, so log records go to ~/.clup/clup.log and only
when debugging is switched on.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from clup.core.config import get_clup_dir

DEBUG_ENV = "CLUP_DEBUG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV, "") not in ("", "0")


def setup_logging(debug: bool = False) -> None:
    """Configure the ``clup`` logger.

    Args:
        debug: Write DEBUG records to the log file. Also enabled by CLUP_DEBUG=1.
    """
    logger = logging.getLogger("clup")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not (debug or debug_enabled()):
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return

    log_dir = get_clup_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "clup.log", maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
