"""Exception hierarchy raised by the filter engine."""

from __future__ import annotations


class FuzzyError(Exception):
    """Base class for all errors raised by :mod:`fuzzy_filters`."""


class OutOfBoundsError(FuzzyError, IndexError):
    """Raised when a pixel coordinate falls outside the buffer extent."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"pixel ({x}, {y}) is outside the {width}x{height} buffer"
        )
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class InvalidKernelError(FuzzyError, ValueError):
    """Raised when a convolution matrix is missing or not exactly 3x3."""


class BufferSizeError(FuzzyError, ValueError):
    """Raised when pixel data does not hold ``width * height * 4`` bytes."""


class EmptyRegionError(FuzzyError, ZeroDivisionError):
    """Raised when a region average is requested for a window without pixels."""
