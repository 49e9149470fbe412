"""Public filter functions and executor selection.

Every filter mutates the given :class:`PixelBuffer` in place and returns it.
Scalar parameters are coerced rather than validated: a nonsensical block size
or blur size quietly becomes the nearest usable value so a filter chain never
aborts halfway.  Only structural problems, such as a malformed convolution
matrix, raise, and they do so before the buffer is touched.
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Callable, Sequence, Union

from numba.core.errors import NumbaError

from ...config import normalise_backend
from ..kernels import (
    DARKEN,
    EDGE_TRACE,
    EMBOSS,
    GAUSSIAN_BLUR,
    LIGHTEN,
    SHARPEN,
    ConvolutionMatrix,
    luminosity_kernel,
)
from ..pixel_buffer import PixelBuffer
from ..values import Channel, Direction, coerce_int
from . import fallback_executor, jit_executor, numpy_executor

_LOGGER = logging.getLogger(__name__)

MatrixLike = Union[ConvolutionMatrix, Sequence[Sequence[float]]]

_EXECUTORS: dict[str, ModuleType] = {
    "jit": jit_executor,
    "numpy": numpy_executor,
    "python": fallback_executor,
}


def _execute(operation: str, buffer: PixelBuffer, backend: str | None, *args: object) -> None:
    """Run *operation* on the executor selected by *backend*.

    ``numpy`` only provides the vectorisable filters; the sequential ones fall
    through to the JIT kernels.  ``auto`` uses the JIT kernels and drops to the
    pure Python executor when Numba cannot compile them.
    """

    mode = normalise_backend(backend)
    if mode in ("python", "numpy"):
        executor = _EXECUTORS[mode]
        handler: Callable[..., None] | None = getattr(executor, operation, None)
        if handler is not None:
            handler(buffer, *args)
            return

    try:
        getattr(jit_executor, operation)(buffer, *args)
    except NumbaError:
        if mode == "jit":
            raise
        _LOGGER.warning(
            "JIT kernel for %s unavailable; using the pure Python executor",
            operation,
            exc_info=True,
        )
        getattr(fallback_executor, operation)(buffer, *args)


def color_filter(buffer: PixelBuffer, channel: object, *, backend: str | None = None) -> PixelBuffer:
    """Keep only the named colour channel, zeroing the other two.

    ``Channel.NONE`` and unrecognised names leave the buffer untouched.
    """

    parsed = Channel.parse(channel)
    if parsed is None:
        _LOGGER.warning("Unrecognised colour filter %r; leaving the buffer unchanged", channel)
        return buffer
    if parsed is Channel.NONE:
        return buffer

    _LOGGER.debug("color_filter(%s) on %r", parsed.value, buffer)
    _execute("apply_color_filter", buffer, backend, parsed.index)
    return buffer


def invert(buffer: PixelBuffer, channel: object = None, *, backend: str | None = None) -> PixelBuffer:
    """Replace each colour channel except *channel* with ``255 - value``.

    Without a channel (or with ``NONE``) all three colour channels flip.
    Alpha is never altered.
    """

    parsed = Channel.parse(channel)
    if parsed is None and channel is not None:
        _LOGGER.warning("Unrecognised invert channel %r; inverting every channel", channel)
    keep = parsed.index if parsed is not None else -1

    _LOGGER.debug("invert(keep=%d) on %r", keep, buffer)
    _execute("apply_invert", buffer, backend, keep)
    return buffer


def greyscale(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    _LOGGER.debug("greyscale on %r", buffer)
    _execute("apply_greyscale", buffer, backend)
    return buffer


def _resolve_block_size(block_size: object, width: int) -> int:
    size = coerce_int(block_size, 1)
    if size <= 0:
        size = 1
    if size >= width:
        size = width - 1
    return max(1, size)


def pixelate(buffer: PixelBuffer, block_size: object, *, backend: str | None = None) -> PixelBuffer:
    """Paint each ``block_size`` square with the pixel nearest its centre."""

    size = _resolve_block_size(block_size, buffer.width)
    _LOGGER.debug("pixelate(%d) on %r", size, buffer)
    _execute("apply_pixelate", buffer, backend, size)
    return buffer


def _resolve_window(value: object) -> int:
    return max(1, coerce_int(value, 1))


def window_blur(
    buffer: PixelBuffer,
    window_width: object,
    window_height: object,
    *,
    backend: str | None = None,
) -> PixelBuffer:
    """Average each window anchored at every pixel and paint it back in place.

    Windows overlap and the pass is sequential, so later windows average
    pixels already rewritten by earlier ones.  Alpha is preserved.
    """

    width = _resolve_window(window_width)
    height = _resolve_window(window_height)
    _LOGGER.debug("window_blur(%d, %d) on %r", width, height, buffer)
    _execute("apply_window_blur", buffer, backend, width, height)
    return buffer


def box_blur(buffer: PixelBuffer, size: object, *, backend: str | None = None) -> PixelBuffer:
    return window_blur(buffer, size, size, backend=backend)


def motion_blur(
    buffer: PixelBuffer,
    size: object,
    direction: object = Direction.HORIZONTAL,
    *,
    backend: str | None = None,
) -> PixelBuffer:
    """Blur along one axis: ``size x 1`` horizontally, ``1 x size`` vertically."""

    parsed = Direction.parse(direction)
    if parsed is None:
        _LOGGER.warning("Unrecognised blur direction %r; using horizontal", direction)
        parsed = Direction.HORIZONTAL
    if parsed is Direction.VERTICAL:
        return window_blur(buffer, 1, size, backend=backend)
    return window_blur(buffer, size, 1, backend=backend)


def convolution(
    buffer: PixelBuffer,
    matrix: MatrixLike,
    divisor: object = 1,
    offset: object = 0,
    *,
    backend: str | None = None,
) -> PixelBuffer:
    """Convolve *buffer* with a 3x3 *matrix*.

    A :class:`ConvolutionMatrix` carries its own divisor and offset; raw
    matrices are validated here and raise :class:`InvalidKernelError` before
    any pixel changes.  Alpha of every pixel becomes 255.
    """

    if isinstance(matrix, ConvolutionMatrix):
        kernel = matrix
    else:
        kernel = ConvolutionMatrix(matrix, divisor, offset)  # type: ignore[arg-type]

    _LOGGER.debug("convolution(%s) on %r", kernel.name, buffer)
    _execute("apply_convolution", buffer, backend, kernel)
    return buffer


def gaussian_blur(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    return convolution(buffer, GAUSSIAN_BLUR, backend=backend)


def emboss(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    return convolution(buffer, EMBOSS, backend=backend)


def sharpen(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    return convolution(buffer, SHARPEN, backend=backend)


def edge_trace(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    return convolution(buffer, EDGE_TRACE, backend=backend)


def luminosity(buffer: PixelBuffer, value: object = 1.0, *, backend: str | None = None) -> PixelBuffer:
    """Scale every colour channel by *value*; ``1.0`` is the identity."""

    return convolution(buffer, luminosity_kernel(value), backend=backend)


def lighten(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    return convolution(buffer, LIGHTEN, backend=backend)


def darken(buffer: PixelBuffer, *, backend: str | None = None) -> PixelBuffer:
    return convolution(buffer, DARKEN, backend=backend)
