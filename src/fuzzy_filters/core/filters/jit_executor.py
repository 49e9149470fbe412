"""JIT-accelerated filter executor using Numba.

This module provides the default execution path: every filter walks the
flat RGBA byte array of a :class:`PixelBuffer` directly inside a compiled
kernel.  Pixelation and the window blurs are sequential in-place passes
whose later reads observe earlier writes, so the loop order (x outer, y
inner) is part of their contract and must not be reordered or parallelised.
"""

from __future__ import annotations

import numpy as np
from numba import jit

from ..kernels import ConvolutionMatrix
from ..pixel_buffer import PixelBuffer
from .algorithms import _clamp_channel, _luma, _region_average


def apply_color_filter(buffer: PixelBuffer, keep: int) -> None:
    """Zero every colour channel except the one at offset *keep*."""

    _color_filter(buffer.data, keep)


def apply_invert(buffer: PixelBuffer, keep: int) -> None:
    """Invert every colour channel except *keep* (``-1`` inverts all three)."""

    _invert(buffer.data, keep)


def apply_greyscale(buffer: PixelBuffer) -> None:
    _greyscale(buffer.data)


def apply_pixelate(buffer: PixelBuffer, block_size: int) -> None:
    if buffer.width <= 0 or buffer.height <= 0:
        return
    _pixelate(buffer.data, buffer.width, buffer.height, block_size)


def apply_window_blur(buffer: PixelBuffer, window_width: int, window_height: int) -> None:
    if buffer.width <= 0 or buffer.height <= 0:
        return
    _window_blur(buffer.data, buffer.width, buffer.height, window_width, window_height)


def apply_convolution(buffer: PixelBuffer, kernel: ConvolutionMatrix) -> None:
    """Convolve *buffer* with *kernel*, reading only from a snapshot."""

    if buffer.width <= 0 or buffer.height <= 0:
        return
    snapshot = buffer.data.copy()
    result = np.empty_like(snapshot)
    weights = np.ascontiguousarray(kernel.weights, dtype=np.float64)
    _convolve(
        snapshot,
        result,
        buffer.width,
        buffer.height,
        weights,
        float(kernel.divisor),
        float(kernel.offset),
    )
    buffer.data[:] = result


@jit(nopython=True, cache=True)
def _color_filter(data: np.ndarray, keep: int) -> None:
    for pixel_offset in range(0, data.size, 4):
        for channel in range(3):
            if channel != keep:
                data[pixel_offset + channel] = 0


@jit(nopython=True, cache=True)
def _invert(data: np.ndarray, keep: int) -> None:
    for pixel_offset in range(0, data.size, 4):
        for channel in range(3):
            if channel != keep:
                data[pixel_offset + channel] = _clamp_channel(
                    255.0 - data[pixel_offset + channel]
                )


@jit(nopython=True, cache=True)
def _greyscale(data: np.ndarray) -> None:
    for pixel_offset in range(0, data.size, 4):
        grey = _luma(data[pixel_offset], data[pixel_offset + 1], data[pixel_offset + 2])
        data[pixel_offset] = grey
        data[pixel_offset + 1] = grey
        data[pixel_offset + 2] = grey


@jit(nopython=True, cache=True)
def _pixelate(data: np.ndarray, width: int, height: int, block_size: int) -> None:
    half = block_size // 2
    for i in range(0, width, block_size):
        for j in range(0, height, block_size):
            offset_x = half
            while i + offset_x >= width:
                offset_x -= 1
            offset_y = half
            while j + offset_y >= height:
                offset_y -= 1

            source = ((i + offset_x) + (j + offset_y) * width) * 4
            r = data[source]
            g = data[source + 1]
            b = data[source + 2]
            a = data[source + 3]

            for x in range(i, min(i + block_size, width)):
                for y in range(j, min(j + block_size, height)):
                    target = (x + y * width) * 4
                    data[target] = r
                    data[target + 1] = g
                    data[target + 2] = b
                    data[target + 3] = a


@jit(nopython=True, cache=True)
def _window_blur(
    data: np.ndarray,
    width: int,
    height: int,
    window_width: int,
    window_height: int,
) -> None:
    for i in range(width):
        for j in range(height):
            r, g, b = _region_average(data, width, height, i, j, window_width, window_height)
            for x in range(i, min(i + window_width, width)):
                for y in range(j, min(j + window_height, height)):
                    target = (x + y * width) * 4
                    data[target] = r
                    data[target + 1] = g
                    data[target + 2] = b
                    # Alpha keeps the destination's own value.


@jit(nopython=True, cache=True)
def _convolve(
    source: np.ndarray,
    target: np.ndarray,
    width: int,
    height: int,
    weights: np.ndarray,
    divisor: float,
    offset: float,
) -> None:
    for y in range(height):
        for x in range(width):
            sum_r = 0.0
            sum_g = 0.0
            sum_b = 0.0
            for i in range(3):
                source_x = x - 1 + i
                if source_x < 0 or source_x >= width:
                    continue
                for j in range(3):
                    source_y = y - 1 + j
                    if source_y < 0 or source_y >= height:
                        continue
                    weight = weights[i, j]
                    index = (source_x + source_y * width) * 4
                    sum_r += weight * source[index]
                    sum_g += weight * source[index + 1]
                    sum_b += weight * source[index + 2]

            pixel_offset = (x + y * width) * 4
            target[pixel_offset] = _clamp_channel(sum_r / divisor + offset)
            target[pixel_offset + 1] = _clamp_channel(sum_g / divisor + offset)
            target[pixel_offset + 2] = _clamp_channel(sum_b / divisor + offset)
            target[pixel_offset + 3] = 255
