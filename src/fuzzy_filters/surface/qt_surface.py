"""Surface adapter for Qt ``QImage`` objects.

This module is imported lazily: :func:`fuzzy_filters.surface.adapter_for`
only loads it once it meets an object coming from PySide6, so the filter
engine itself never depends on Qt.
"""

from __future__ import annotations

import numpy as np
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage

from ..core.pixel_buffer import PixelBuffer
from ..core.values import Dimension
from .base import SurfaceAdapter

_RGBA = QImage.Format.Format_RGBA8888


def _resolve_pixel_buffer(image: QImage) -> tuple[memoryview, object]:
    """Return a writable 1-D :class:`memoryview` over *image*'s pixels.

    PySide exposes ``bits()`` as a ready-to-use ``memoryview`` while other
    wrappers hand out a pointer object that needs ``setsize`` before Python
    can view the memory.  The tuple's second element keeps the underlying Qt
    buffer alive for as long as the view is in use.
    """

    bytes_per_line = image.bytesPerLine()
    height = image.height()
    buffer = image.bits()
    expected_size = bytes_per_line * height

    guard: object = buffer

    if isinstance(buffer, memoryview):
        view = buffer
    else:
        try:
            view = memoryview(buffer)
        except TypeError:
            if hasattr(buffer, "setsize"):
                buffer.setsize(expected_size)
                view = memoryview(buffer)
            else:
                raise RuntimeError("Unsupported QImage.bits() buffer wrapper") from None

    # Normalise to unsigned bytes so per-channel offsets are consistent.
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")

    if len(view) < expected_size:
        raise BufferError("QImage pixel buffer is smaller than expected")

    return view[:expected_size], guard


def _rows(image: QImage) -> np.ndarray:
    """Return an ``(H, W, 4)`` view over an RGBA8888 *image*, padding stripped."""

    view, guard = _resolve_pixel_buffer(image)
    _ = guard
    surface = np.frombuffer(view, dtype=np.uint8).reshape((image.height(), image.bytesPerLine()))
    return surface[:, : image.width() * 4].reshape((image.height(), image.width(), 4))


class QtSurface(SurfaceAdapter):
    """Adapter for :class:`PySide6.QtGui.QImage` sources of any format."""

    kind = "qt"

    @classmethod
    def accepts(cls, source: object) -> bool:
        return isinstance(source, QImage) and not source.isNull()

    def read(self, source: object) -> PixelBuffer:
        assert isinstance(source, QImage)
        image = source if source.format() == _RGBA else source.convertToFormat(_RGBA)
        return PixelBuffer.from_array(_rows(image))

    def render(self, buffer: PixelBuffer, dimension: Dimension) -> QImage:
        image = QImage(buffer.width, buffer.height, _RGBA)
        if buffer.dimension.area:
            _rows(image)[...] = buffer.to_array()
        if dimension == buffer.dimension:
            return image
        return image.scaled(
            dimension.width,
            dimension.height,
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )

    def write_back(self, target: object, buffer: PixelBuffer) -> None:
        assert isinstance(target, QImage)
        rendered = self.render(buffer, Dimension(target.width(), target.height()))
        if target.format() != _RGBA:
            rendered = rendered.convertToFormat(target.format())
        if rendered.bytesPerLine() != target.bytesPerLine():
            raise BufferError("QImage row stride changed during conversion")

        source_view, source_guard = _resolve_pixel_buffer(rendered)
        target_view, target_guard = _resolve_pixel_buffer(target)
        _ = (source_guard, target_guard)
        if getattr(target_view, "readonly", False):
            raise BufferError("QImage pixel buffer is read-only")
        target_view[:] = source_view
