"""Logging helpers."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "audioswitch"
LOG_FILENAME = "audioswitch.log"


def _file_handlers(logger: logging.Logger) -> list[RotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def setup_logging(
    log_dir: str = "logs",
    level: int = logging.INFO,
    filename: str = LOG_FILENAME,
) -> tuple[logging.Logger, str]:
    """
    Attach a rotating log file to the audioswitch logger.

    Each timeline run writes to one file; calling again with another
    directory moves logging there instead of writing to both.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, filename))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    current = _file_handlers(logger)
    for handler in current:
        if handler.baseFilename != log_path:
            logger.removeHandler(handler)
            handler.close()

    if not _file_handlers(logger):
        handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger, log_path
