"""Scalar pixel math for the JIT executor.

Every helper is compiled with Numba so the kernels in
:mod:`.jit_executor` can inline them.  The fallback executor keeps its own
plain Python copies of this math so it still runs when Numba cannot compile.
"""

from __future__ import annotations

import numpy as np
from numba import jit


@jit(nopython=True, cache=True)
def _clamp_channel(value: float) -> int:
    """Clamp *value* to ``[0, 255]`` and truncate it toward zero."""

    if value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


@jit(nopython=True, cache=True)
def _luma(r: int, g: int, b: int) -> int:
    """Return ``trunc(0.299 r + 0.587 g + 0.114 b)`` using exact integer math.

    The weights sum to exactly one, so a grey pixel maps onto itself and the
    greyscale filter is idempotent.
    """

    return (299 * int(r) + 587 * int(g) + 114 * int(b)) // 1000


@jit(nopython=True, cache=True)
def _region_average(
    data: np.ndarray,
    width: int,
    height: int,
    x: int,
    y: int,
    window_width: int,
    window_height: int,
):
    """Return the truncated mean ``(r, g, b)`` of a window clipped to the buffer.

    An empty window raises a plain :class:`ZeroDivisionError`, since nopython
    code cannot raise the package exceptions.  :func:`.region.region_average`
    raises :class:`~fuzzy_filters.errors.EmptyRegionError` (a subclass) for
    the same case.  The blur kernels always pass a window anchored inside the
    buffer with sizes of at least 1, so they never hit it.
    """

    total_r = 0
    total_g = 0
    total_b = 0
    count = 0
    for i in range(x, min(x + window_width, width)):
        for j in range(y, min(y + window_height, height)):
            offset = (i + j * width) * 4
            total_r += data[offset]
            total_g += data[offset + 1]
            total_b += data[offset + 2]
            count += 1

    if count == 0:
        raise ZeroDivisionError("averaging window holds no pixels")

    return total_r // count, total_g // count, total_b // count
