"""Filter engine operating on in-memory pixel buffers.

This package separates the concerns of the engine:
- algorithms / region: scalar math and window averaging
- executors: JIT, NumPy and pure Python implementations
- facade: the public filter functions and executor dispatch
"""

from __future__ import annotations

from .facade import (
    box_blur,
    color_filter,
    convolution,
    darken,
    edge_trace,
    emboss,
    gaussian_blur,
    greyscale,
    invert,
    lighten,
    luminosity,
    motion_blur,
    pixelate,
    sharpen,
    window_blur,
)
from .region import region_average

__all__ = [
    "box_blur",
    "color_filter",
    "convolution",
    "darken",
    "edge_trace",
    "emboss",
    "gaussian_blur",
    "greyscale",
    "invert",
    "lighten",
    "luminosity",
    "motion_blur",
    "pixelate",
    "region_average",
    "sharpen",
    "window_blur",
]
