"""Surface adapters supplying and consuming pixel buffers."""

from __future__ import annotations

import logging
from typing import Optional

from ..core.pixel_buffer import PixelBuffer
from .array_surface import ArraySurface
from .base import SurfaceAdapter, resolve_dimensions
from .pillow_surface import PillowSurface, resample

_LOGGER = logging.getLogger(__name__)


def _is_qt_object(source: object) -> bool:
    return type(source).__module__.startswith("PySide6")


def adapter_for(source: object) -> Optional[SurfaceAdapter]:
    """Return the adapter able to read *source*, or ``None``."""

    for adapter_cls in (PillowSurface, ArraySurface):
        if adapter_cls.accepts(source):
            return adapter_cls()
    if _is_qt_object(source):
        from .qt_surface import QtSurface

        if QtSurface.accepts(source):
            return QtSurface()
    return None


def ingest(source: object) -> Optional[PixelBuffer]:
    """Return a new buffer read from *source*, or ``None`` when unsupported."""

    adapter = adapter_for(source)
    if adapter is None:
        _LOGGER.debug("No surface adapter for %s", type(source).__name__)
        return None
    return adapter.read(source)


__all__ = [
    "ArraySurface",
    "PillowSurface",
    "SurfaceAdapter",
    "adapter_for",
    "ingest",
    "resample",
    "resolve_dimensions",
]
