"""Named 3x3 convolution kernels and their normalisation terms."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from ..errors import InvalidKernelError
from .values import coerce_float

KERNEL_SHAPE = (3, 3)


def _validate_weights(matrix: object) -> np.ndarray:
    if matrix is None:
        raise InvalidKernelError("a 3x3 convolution matrix is required")
    try:
        weights = np.array(matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidKernelError(f"convolution matrix must be numeric: {exc}") from exc
    if weights.shape != KERNEL_SHAPE:
        raise InvalidKernelError(
            f"convolution matrix must be 3x3, got shape {weights.shape}"
        )
    if not np.all(np.isfinite(weights)):
        raise InvalidKernelError("convolution matrix weights must be finite")
    weights.setflags(write=False)
    return weights


@dataclass(frozen=True, eq=False)
class ConvolutionMatrix:
    """A validated 3x3 kernel with its divisor and offset.

    ``weights[i][j]`` multiplies the source pixel ``(x - 1 + i, y - 1 + j)``,
    so the first index walks the horizontal neighbourhood.  Each colour
    channel of the destination becomes
    ``clamp(sum(weight * channel) / divisor + offset, 0, 255)``.
    """

    weights: np.ndarray
    divisor: float = 1.0
    offset: float = 0.0
    name: str = field(default="custom", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", _validate_weights(self.weights))
        divisor = coerce_float(self.divisor, 1.0)
        object.__setattr__(self, "divisor", divisor if divisor >= 1.0 else 1.0)
        object.__setattr__(self, "offset", coerce_float(self.offset, 0.0))

    def rows(self) -> list[list[float]]:
        return self.weights.tolist()


def luminosity_kernel(value: object = 1.0) -> ConvolutionMatrix:
    """Return the centre-weight kernel scaling every channel by *value*.

    ``1.0`` leaves the image unchanged; non-numeric input falls back to
    ``1.0`` and negative factors clamp to ``0``.
    """

    factor = max(0.0, coerce_float(value, 1.0))
    weights = np.zeros(KERNEL_SHAPE, dtype=np.float64)
    weights[1, 1] = factor
    return ConvolutionMatrix(weights, name="luminosity")


GAUSSIAN_BLUR = ConvolutionMatrix(
    [[1, 2, 1], [2, 4, 2], [1, 2, 1]], divisor=16, name="gaussian_blur"
)
EMBOSS = ConvolutionMatrix([[-2, -1, 0], [-1, 1, 1], [0, 1, 2]], name="emboss")
SHARPEN = ConvolutionMatrix([[0, -1, 0], [-1, 5, -1], [0, -1, 0]], name="sharpen")
EDGE_TRACE = ConvolutionMatrix(
    [[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]], name="edge_trace"
)
LIGHTEN = ConvolutionMatrix(luminosity_kernel(1.2).weights, name="lighten")
DARKEN = ConvolutionMatrix(luminosity_kernel(0.8).weights, name="darken")

KERNELS: Mapping[str, ConvolutionMatrix] = MappingProxyType(
    {
        "gaussian_blur": GAUSSIAN_BLUR,
        "emboss": EMBOSS,
        "sharpen": SHARPEN,
        "edge_trace": EDGE_TRACE,
        "luminosity": luminosity_kernel(),
        "lighten": LIGHTEN,
        "darken": DARKEN,
    }
)


def get_kernel(name: str) -> ConvolutionMatrix:
    """Return the catalog kernel called *name*."""

    try:
        return KERNELS[name]
    except KeyError:
        raise InvalidKernelError(f"unknown kernel {name!r}") from None


__all__ = [
    "DARKEN",
    "EDGE_TRACE",
    "EMBOSS",
    "GAUSSIAN_BLUR",
    "KERNELS",
    "LIGHTEN",
    "SHARPEN",
    "ConvolutionMatrix",
    "get_kernel",
    "luminosity_kernel",
]
