"""Pixel-buffer filter engine: channel isolation, blurs and 3x3 convolution."""

from __future__ import annotations

from .config import EngineConfig
from .core.kernels import KERNELS, ConvolutionMatrix, get_kernel, luminosity_kernel
from .core.pixel_buffer import PixelBuffer
from .core.values import Channel, Dimension, Direction, Pixel
from .engine import FilterSession, open_session
from .errors import (
    BufferSizeError,
    EmptyRegionError,
    FuzzyError,
    InvalidKernelError,
    OutOfBoundsError,
)

__all__ = [
    "KERNELS",
    "BufferSizeError",
    "Channel",
    "ConvolutionMatrix",
    "Dimension",
    "Direction",
    "EmptyRegionError",
    "EngineConfig",
    "FilterSession",
    "FuzzyError",
    "InvalidKernelError",
    "OutOfBoundsError",
    "Pixel",
    "PixelBuffer",
    "get_kernel",
    "luminosity_kernel",
    "open_session",
]
