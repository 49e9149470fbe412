"""Runtime configuration for filter sessions."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Union

_LOGGER = logging.getLogger(__name__)

BACKENDS = ("auto", "jit", "numpy", "python")
"""Executor strategies understood by :mod:`fuzzy_filters.core.filters`."""

BACKEND_ENV = "FUZZY_BACKEND"
LOG_LEVEL_ENV = "FUZZY_LOG_LEVEL"


def normalise_backend(value: object) -> str:
    """Return *value* as one of :data:`BACKENDS`, defaulting to ``"auto"``."""

    if value is None:
        return "auto"
    candidate = str(value).strip().lower()
    if candidate in BACKENDS:
        return candidate
    _LOGGER.warning("Unknown filter backend %r; using 'auto'", value)
    return "auto"


def normalise_log_level(value: object) -> int:
    """Return *value* as a numeric logging level, defaulting to ``INFO``."""

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if value is not None:
        resolved = logging.getLevelName(str(value).strip().upper())
        if isinstance(resolved, int):
            return resolved
        _LOGGER.warning("Unknown log level %r; using INFO", value)
    return logging.INFO


@dataclass(frozen=True)
class EngineConfig:
    """Settings shared by every filter applied through a session."""

    backend: str = "auto"
    log_level: Union[int, str] = logging.INFO

    def __post_init__(self) -> None:
        object.__setattr__(self, "backend", normalise_backend(self.backend))
        object.__setattr__(self, "log_level", normalise_log_level(self.log_level))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        """Build a config from ``FUZZY_BACKEND`` and ``FUZZY_LOG_LEVEL``."""

        env = os.environ if environ is None else environ
        return cls(
            backend=env.get(BACKEND_ENV, "auto"),
            log_level=env.get(LOG_LEVEL_ENV, "INFO"),
        )


__all__ = ["BACKENDS", "EngineConfig", "normalise_backend", "normalise_log_level"]
