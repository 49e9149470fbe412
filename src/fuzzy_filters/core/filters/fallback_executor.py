"""Fallback filter executor working one :class:`Pixel` at a time.

This path never touches the raw byte array directly; it goes through the
bounds-checked ``get``/``set`` accessors instead.  It is much slower than the
JIT kernels but imports nothing from Numba and mirrors them exactly, loop
order included, so both paths yield identical bytes.
"""

from __future__ import annotations

from dataclasses import replace

from ..kernels import ConvolutionMatrix
from ..pixel_buffer import PixelBuffer
from ..values import Pixel, clamp_channel
from .region import region_average

_CHANNEL_FIELDS = ("r", "g", "b")


def apply_color_filter(buffer: PixelBuffer, keep: int) -> None:
    cleared = {name: 0 for index, name in enumerate(_CHANNEL_FIELDS) if index != keep}
    for x, y, pixel in buffer.pixels():
        buffer.set(x, y, replace(pixel, **cleared))


def apply_invert(buffer: PixelBuffer, keep: int) -> None:
    for x, y, pixel in buffer.pixels():
        inverted = {
            name: 255 - getattr(pixel, name)
            for index, name in enumerate(_CHANNEL_FIELDS)
            if index != keep
        }
        buffer.set(x, y, replace(pixel, **inverted))


def apply_greyscale(buffer: PixelBuffer) -> None:
    for x, y, pixel in buffer.pixels():
        grey = (299 * pixel.r + 587 * pixel.g + 114 * pixel.b) // 1000
        buffer.set(x, y, Pixel(grey, grey, grey, pixel.a))


def apply_pixelate(buffer: PixelBuffer, block_size: int) -> None:
    width = buffer.width
    height = buffer.height
    half = block_size // 2
    for i in range(0, width, block_size):
        for j in range(0, height, block_size):
            offset_x = half
            while i + offset_x >= width:
                offset_x -= 1
            offset_y = half
            while j + offset_y >= height:
                offset_y -= 1

            sample = buffer.get(i + offset_x, j + offset_y)
            for x in range(i, min(i + block_size, width)):
                for y in range(j, min(j + block_size, height)):
                    buffer.set(x, y, sample)


def apply_window_blur(buffer: PixelBuffer, window_width: int, window_height: int) -> None:
    for i in range(buffer.width):
        for j in range(buffer.height):
            average = region_average(buffer, i, j, window_width, window_height)
            for x in range(i, min(i + window_width, buffer.width)):
                for y in range(j, min(j + window_height, buffer.height)):
                    buffer.set(x, y, replace(average, a=buffer.get(x, y).a))


def apply_convolution(buffer: PixelBuffer, kernel: ConvolutionMatrix) -> None:
    snapshot = buffer.copy()
    result = PixelBuffer(buffer.width, buffer.height)
    weights = kernel.rows()
    for y in range(buffer.height):
        for x in range(buffer.width):
            sums = [0.0, 0.0, 0.0]
            for i in range(3):
                source_x = x - 1 + i
                if source_x < 0 or source_x >= buffer.width:
                    continue
                for j in range(3):
                    source_y = y - 1 + j
                    if source_y < 0 or source_y >= buffer.height:
                        continue
                    weight = weights[i][j]
                    source = snapshot.get(source_x, source_y)
                    sums[0] += weight * source.r
                    sums[1] += weight * source.g
                    sums[2] += weight * source.b

            r, g, b = (
                clamp_channel(total / kernel.divisor + kernel.offset) for total in sums
            )
            result.set(x, y, Pixel(r, g, b, 255))
    buffer.assign(result)
