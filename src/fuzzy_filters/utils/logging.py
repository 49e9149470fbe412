"""Logging helpers for fuzzy_filters."""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER: Optional[logging.Logger] = None


def get_logger(level: Union[int, str, None] = None) -> logging.Logger:
    """Return the package logger, configuring it on first use.

    Module loggers created with ``logging.getLogger(__name__)`` are children of
    this logger, so the handler installed here serves the whole package.
    *level* only applies while the logger is first configured; later calls
    leave the threshold alone so one caller cannot retune logging for every
    other live session.
    """

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger("fuzzy_filters")
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(logging.INFO if level is None else level)
    return _LOGGER
