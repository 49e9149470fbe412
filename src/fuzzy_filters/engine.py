"""Fluent filter sessions wrapping a single owned pixel buffer."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import EngineConfig
from .core import filters
from .core.filters.facade import MatrixLike
from .core.pixel_buffer import PixelBuffer
from .core.values import Direction
from .surface import PillowSurface, SurfaceAdapter, adapter_for, resolve_dimensions
from .utils.logging import get_logger

_LOGGER = logging.getLogger(__name__)


class FilterSession:
    """Apply a chain of filters to one exclusively owned :class:`PixelBuffer`.

    Each filter method mutates the working buffer and returns the session so
    calls can be chained::

        open_session(image).greyscale().pixelate(4).draw(image)

    Sessions share no state with each other; any number may run side by side.
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        *,
        adapter: Optional[SurfaceAdapter] = None,
        source: object = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        """
        :param buffer: Working buffer; the session takes ownership of it.
        :param adapter: Surface adapter used for rendering, Pillow by default.
        :param source: Original surface, used by ``draw(overwrite=True)``.
        :param config: Engine settings; defaults to :class:`EngineConfig`.
        """

        self._buffer = buffer
        self._adapter = adapter if adapter is not None else PillowSurface()
        self._source = source
        self._config = config if config is not None else EngineConfig()

    @property
    def buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def config(self) -> EngineConfig:
        return self._config

    def snapshot(self) -> PixelBuffer:
        """Return a copy of the current working buffer."""

        return self._buffer.copy()

    # Filters -----------------------------------------------------------------

    def color_filter(self, channel: object) -> "FilterSession":
        filters.color_filter(self._buffer, channel, backend=self._config.backend)
        return self

    def invert(self, channel: object = None) -> "FilterSession":
        filters.invert(self._buffer, channel, backend=self._config.backend)
        return self

    def greyscale(self) -> "FilterSession":
        filters.greyscale(self._buffer, backend=self._config.backend)
        return self

    def pixelate(self, block_size: object) -> "FilterSession":
        filters.pixelate(self._buffer, block_size, backend=self._config.backend)
        return self

    def window_blur(self, window_width: object, window_height: object) -> "FilterSession":
        filters.window_blur(
            self._buffer, window_width, window_height, backend=self._config.backend
        )
        return self

    def box_blur(self, size: object) -> "FilterSession":
        filters.box_blur(self._buffer, size, backend=self._config.backend)
        return self

    def motion_blur(self, size: object, direction: object = Direction.HORIZONTAL) -> "FilterSession":
        filters.motion_blur(self._buffer, size, direction, backend=self._config.backend)
        return self

    def convolution(
        self, matrix: MatrixLike, divisor: object = 1, offset: object = 0
    ) -> "FilterSession":
        filters.convolution(
            self._buffer, matrix, divisor, offset, backend=self._config.backend
        )
        return self

    def gaussian_blur(self) -> "FilterSession":
        filters.gaussian_blur(self._buffer, backend=self._config.backend)
        return self

    def emboss(self) -> "FilterSession":
        filters.emboss(self._buffer, backend=self._config.backend)
        return self

    def sharpen(self) -> "FilterSession":
        filters.sharpen(self._buffer, backend=self._config.backend)
        return self

    def edge_trace(self) -> "FilterSession":
        filters.edge_trace(self._buffer, backend=self._config.backend)
        return self

    def luminosity(self, value: object = 1.0) -> "FilterSession":
        filters.luminosity(self._buffer, value, backend=self._config.backend)
        return self

    def lighten(self) -> "FilterSession":
        filters.lighten(self._buffer, backend=self._config.backend)
        return self

    def darken(self) -> "FilterSession":
        filters.darken(self._buffer, backend=self._config.backend)
        return self

    # Egress ------------------------------------------------------------------

    def scale(self, width: object = None, height: object = None) -> object:
        """Render the current buffer as a new surface of the requested size.

        A lone width or height keeps the aspect ratio; neither keeps the
        native size.
        """

        dimension = resolve_dimensions(self._buffer.dimension, width, height)
        return self._adapter.render(self._buffer, dimension)

    def draw(
        self,
        target: object = None,
        *,
        width: object = None,
        height: object = None,
        overwrite: bool = False,
        callback: Optional[Callable[[object], None]] = None,
    ) -> object:
        """Flush the working buffer to its destinations.

        ``target`` receives the result resampled to its own size when an
        adapter supports it.  ``overwrite=True`` writes into the surface the
        session was opened from.  ``callback`` is called with
        ``scale(width, height)``.  A native-size rendering is always returned.
        """

        if target is not None:
            target_adapter = adapter_for(target)
            if target_adapter is None:
                _LOGGER.warning("Cannot draw into %s; skipping target", type(target).__name__)
            else:
                target_adapter.write_back(target, self._buffer)

        if overwrite:
            if self._source is None:
                _LOGGER.debug("overwrite requested but the session has no source surface")
            else:
                self._adapter.write_back(self._source, self._buffer)

        if callable(callback):
            callback(self.scale(width, height))

        return self._adapter.render(self._buffer, self._buffer.dimension)


def open_session(source: object, *, config: Optional[EngineConfig] = None) -> Optional[FilterSession]:
    """Start a filter session on *source*.

    *source* may be a :class:`PixelBuffer` (copied), a Pillow image, an RGB(A)
    ``uint8`` array or a ``QImage``.  Unsupported sources yield ``None`` so
    callers can skip any further processing.
    """

    resolved = config if config is not None else EngineConfig.from_env()
    get_logger(resolved.log_level)

    if isinstance(source, PixelBuffer):
        return FilterSession(source.copy(), config=resolved)

    adapter = adapter_for(source)
    if adapter is None:
        _LOGGER.debug("Unsupported filter source %s", type(source).__name__)
        return None

    buffer = adapter.read(source)
    _LOGGER.debug("Opened %s session on %r", adapter.kind, buffer)
    return FilterSession(buffer, adapter=adapter, source=source, config=resolved)


__all__ = ["FilterSession", "open_session"]
