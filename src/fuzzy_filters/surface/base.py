"""Surface adapters translating image objects to and from pixel buffers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.pixel_buffer import PixelBuffer
from ..core.values import Dimension, coerce_int


class SurfaceAdapter(ABC):
    """Abstract bridge between an image representation and :class:`PixelBuffer`.

    The filter engine only ever sees pixel buffers.  Adapters own everything
    around that: decoding a source into RGBA bytes, rendering a buffer into a
    new surface of a requested size, and writing results back into an
    existing surface.
    """

    kind: str = "unknown"
    """Short label used in log messages (e.g. ``"pillow"``)."""

    @classmethod
    @abstractmethod
    def accepts(cls, source: object) -> bool:
        """Return ``True`` when this adapter can read *source*."""

    @abstractmethod
    def read(self, source: object) -> PixelBuffer:
        """Return a new buffer holding the pixels of *source*."""

    @abstractmethod
    def render(self, buffer: PixelBuffer, dimension: Dimension) -> object:
        """Return a new surface showing *buffer* resampled to *dimension*."""

    @abstractmethod
    def write_back(self, target: object, buffer: PixelBuffer) -> None:
        """Replace the contents of *target* with *buffer*, keeping its size."""


def resolve_dimensions(native: Dimension, width: object = None, height: object = None) -> Dimension:
    """Return the output size for a render request.

    A lone width or height scales the other side proportionally (truncated);
    when neither is given the native size is used.  Zero or non-numeric values
    count as not given.
    """

    requested_width = coerce_int(width, 0)
    requested_height = coerce_int(height, 0)
    has_width = requested_width > 0
    has_height = requested_height > 0

    if has_width and has_height:
        return Dimension(requested_width, requested_height)
    if has_width:
        if requested_width == native.width or native.width == 0:
            return Dimension(requested_width, native.height)
        return Dimension(
            requested_width, int(requested_width / native.width * native.height)
        )
    if has_height:
        if requested_height == native.height or native.height == 0:
            return Dimension(native.width, requested_height)
        return Dimension(
            int(requested_height / native.height * native.width), requested_height
        )
    return native
