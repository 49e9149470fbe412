"""Region averaging over :class:`Pixel` values."""

from __future__ import annotations

from ...errors import EmptyRegionError
from ..pixel_buffer import PixelBuffer
from ..values import Pixel


def region_average(
    buffer: PixelBuffer,
    x: int,
    y: int,
    window_width: int,
    window_height: int,
) -> Pixel:
    """Return the mean colour of the window anchored at ``(x, y)``.

    The window ``[x, x + window_width) x [y, y + window_height)`` is clipped
    to the buffer.  Each colour channel is summed and divided with integer
    truncation; the result is fully opaque because blur callers substitute
    the destination's own alpha before writing.
    """

    total_r = total_g = total_b = 0
    count = 0
    for i in range(x, min(x + window_width, buffer.width)):
        for j in range(y, min(y + window_height, buffer.height)):
            pixel = buffer.get(i, j)
            total_r += pixel.r
            total_g += pixel.g
            total_b += pixel.b
            count += 1

    if count == 0:
        raise EmptyRegionError(
            f"window {window_width}x{window_height} at ({x}, {y}) holds no pixels"
        )

    return Pixel(total_r // count, total_g // count, total_b // count, 255)
