"""Logging setup for the ``holdfile`` logger tree."""

from __future__ import annotations

import logging

from holdfile.config import log_file, log_level

_LOGGER_NAME = "holdfile"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> logging.Logger:
    """Attach a handler to the package logger once.

    Nothing is configured on import; applications call this when they want
    lockfile diagnostics without setting up logging themselves.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    path = log_file()
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger.setLevel(log_level())
    logger.addHandler(handler)
    return logger
