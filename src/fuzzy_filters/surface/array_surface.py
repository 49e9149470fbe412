"""Surface adapter for plain NumPy image arrays."""

from __future__ import annotations

import numpy as np

from ..core.pixel_buffer import PixelBuffer
from ..core.values import Dimension
from .base import SurfaceAdapter
from .pillow_surface import resample


class ArraySurface(SurfaceAdapter):
    """Adapter for ``(H, W, 3)`` and ``(H, W, 4)`` ``uint8`` arrays."""

    kind = "array"

    @classmethod
    def accepts(cls, source: object) -> bool:
        return (
            isinstance(source, np.ndarray)
            and source.dtype == np.uint8
            and source.ndim == 3
            and source.shape[2] in (3, 4)
        )

    def read(self, source: object) -> PixelBuffer:
        return PixelBuffer.from_array(source)  # type: ignore[arg-type]

    def render(self, buffer: PixelBuffer, dimension: Dimension) -> np.ndarray:
        if dimension != buffer.dimension:
            buffer = resample(buffer, dimension)
        return buffer.to_array()

    def write_back(self, target: object, buffer: PixelBuffer) -> None:
        assert isinstance(target, np.ndarray)
        height, width, channels = target.shape
        rendered = self.render(buffer, Dimension(width, height))
        target[...] = rendered[..., :channels]
