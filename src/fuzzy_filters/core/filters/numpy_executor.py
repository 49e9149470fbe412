"""NumPy vectorised executor for point filters and convolution.

Only filters whose output pixels are independent of each other can be
vectorised.  Pixelation and the window blurs read their own earlier writes,
so they have no counterpart here and the facade routes them to the
sequential kernels instead.
"""

from __future__ import annotations

import numpy as np

from ..kernels import ConvolutionMatrix
from ..pixel_buffer import PixelBuffer

_LUMA_WEIGHTS = np.array([299, 587, 114], dtype=np.int64)


def _pixels(buffer: PixelBuffer) -> np.ndarray:
    """Return an ``(N, 4)`` view sharing memory with *buffer*."""

    return buffer.data.reshape((-1, 4))


def _other_channels(keep: int) -> list[int]:
    return [channel for channel in range(3) if channel != keep]


def apply_color_filter(buffer: PixelBuffer, keep: int) -> None:
    pixels = _pixels(buffer)
    pixels[:, _other_channels(keep)] = 0


def apply_invert(buffer: PixelBuffer, keep: int) -> None:
    pixels = _pixels(buffer)
    channels = _other_channels(keep)
    pixels[:, channels] = 255 - pixels[:, channels]


def apply_greyscale(buffer: PixelBuffer) -> None:
    pixels = _pixels(buffer)
    grey = (pixels[:, :3].astype(np.int64) @ _LUMA_WEIGHTS) // 1000
    pixels[:, :3] = grey.astype(np.uint8)[:, None]


def apply_convolution(buffer: PixelBuffer, kernel: ConvolutionMatrix) -> None:
    """Vectorised 3x3 convolution with zero contribution beyond the edges."""

    width = buffer.width
    height = buffer.height
    if width <= 0 or height <= 0:
        return

    rgb = buffer.data.reshape((height, width, 4))[..., :3].astype(np.float64)
    padded = np.pad(rgb, ((1, 1), (1, 1), (0, 0)))
    accumulator = np.zeros_like(rgb)
    # ``weights[i, j]`` pairs with the source at (x - 1 + i, y - 1 + j), which
    # is row ``y + j`` and column ``x + i`` of the padded image.
    for i in range(3):
        for j in range(3):
            accumulator += kernel.weights[i, j] * padded[j : j + height, i : i + width]

    values = accumulator / kernel.divisor + kernel.offset
    result = np.empty((height, width, 4), dtype=np.uint8)
    result[..., :3] = np.trunc(np.clip(values, 0.0, 255.0)).astype(np.uint8)
    result[..., 3] = 255
    buffer.data[:] = result.reshape(-1)
