"""Logging configuration for the renderer.

Frames own stdout, so diagnostics go to stderr or to a log file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

_LOGGER_NAME = __name__.rpartition(".")[0]
_FORMAT = "[%(name)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def configure_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[Path] = None) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)
    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(str(log_file), encoding="utf-8")
        handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("logging configured")
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
