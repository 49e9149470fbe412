"""Pillow-backed surface adapter and resampling."""

from __future__ import annotations

import numpy as np
from PIL import Image

from ..core.pixel_buffer import PixelBuffer
from ..core.values import Dimension
from .base import SurfaceAdapter


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Return an RGBA :class:`PIL.Image.Image` holding a copy of *buffer*."""

    if buffer.width == 0 or buffer.height == 0:
        return Image.new("RGBA", (buffer.width, buffer.height))
    return Image.fromarray(buffer.to_array())


def _scaled(image: Image.Image, dimension: Dimension) -> Image.Image:
    size = (dimension.width, dimension.height)
    if image.size == size:
        return image
    if dimension.area == 0 or image.width == 0 or image.height == 0:
        return Image.new("RGBA", size)
    return image.resize(size, Image.Resampling.BILINEAR)


def resample(buffer: PixelBuffer, dimension: Dimension) -> PixelBuffer:
    """Return *buffer* scaled to *dimension* with bilinear filtering."""

    if dimension.area == 0:
        return PixelBuffer(dimension.width, dimension.height)
    scaled = _scaled(buffer_to_image(buffer), dimension)
    return PixelBuffer.from_array(np.asarray(scaled, dtype=np.uint8))


class PillowSurface(SurfaceAdapter):
    """Adapter for :class:`PIL.Image.Image` sources in any mode."""

    kind = "pillow"

    @classmethod
    def accepts(cls, source: object) -> bool:
        return isinstance(source, Image.Image)

    def read(self, source: object) -> PixelBuffer:
        assert isinstance(source, Image.Image)
        image = source if source.mode == "RGBA" else source.convert("RGBA")
        if image.width == 0 or image.height == 0:
            return PixelBuffer(image.width, image.height)
        return PixelBuffer.from_array(np.asarray(image, dtype=np.uint8))

    def render(self, buffer: PixelBuffer, dimension: Dimension) -> Image.Image:
        return _scaled(buffer_to_image(buffer), dimension)

    def write_back(self, target: object, buffer: PixelBuffer) -> None:
        assert isinstance(target, Image.Image)
        rendered = self.render(buffer, Dimension(target.width, target.height))
        if target.mode != rendered.mode:
            rendered = rendered.convert(target.mode)
        target.paste(rendered)
