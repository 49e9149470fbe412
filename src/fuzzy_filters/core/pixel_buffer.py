"""Flat RGBA pixel storage owned by a filter session."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence, Union

import numpy as np

from ..errors import BufferSizeError, OutOfBoundsError
from .values import Dimension, Pixel

PixelLike = Union[Pixel, Mapping[str, object], Sequence[object]]


def _as_channel_bytes(data: object) -> np.ndarray:
    """Return a private, flat ``uint8`` copy of *data* clamped to ``[0, 255]``."""

    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8).copy()
    array = np.asarray(data)
    if array.dtype == np.uint8:
        return array.reshape(-1).copy()
    if array.dtype.kind == "f":
        array = np.nan_to_num(array, nan=0.0)
    return np.clip(array, 0, 255).astype(np.uint8).reshape(-1)


class PixelBuffer:
    """Row-major RGBA bytes with bounds-checked pixel access.

    Pixel ``(x, y)`` occupies ``data[(x + y * width) * 4 : +4]``.  The byte
    count always equals ``width * height * 4``; any payload that violates the
    invariant is rejected with :class:`BufferSizeError`.  Payloads are copied
    on construction so the buffer never aliases caller memory.
    """

    __slots__ = ("_dimension", "_data")

    def __init__(self, width: object, height: object, data: object = None) -> None:
        dimension = Dimension(width, height)  # type: ignore[arg-type]
        if data is None:
            channels = np.zeros(dimension.byte_length, dtype=np.uint8)
        else:
            channels = _as_channel_bytes(data)
            if channels.size != dimension.byte_length:
                raise BufferSizeError(
                    f"expected {dimension.byte_length} bytes for a "
                    f"{dimension.width}x{dimension.height} buffer, got {channels.size}"
                )
        self._dimension = dimension
        self._data = channels

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an ``(H, W, 4)`` or ``(H, W, 3)`` array.

        Three-channel input is treated as fully opaque.
        """

        source = np.asarray(array)
        if source.ndim != 3 or source.shape[2] not in (3, 4):
            raise BufferSizeError(f"expected an (H, W, 3|4) array, got shape {source.shape}")
        height, width = source.shape[:2]
        if source.shape[2] == 3:
            rgba = np.full((height, width, 4), 255, dtype=source.dtype)
            rgba[..., :3] = source
            source = rgba
        return cls(width, height, source)

    @property
    def width(self) -> int:
        return self._dimension.width

    @property
    def height(self) -> int:
        return self._dimension.height

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def data(self) -> np.ndarray:
        """The flat ``uint8`` channel array; executors mutate it in place."""

        return self._data

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return (x + y * self.width) * 4

    def get(self, x: int, y: int) -> Pixel:
        """Return a copy of the pixel at ``(x, y)``."""

        offset = self._offset(x, y)
        r, g, b, a = self._data[offset : offset + 4].tolist()
        return Pixel(r, g, b, a)

    def set(self, x: int, y: int, pixel: PixelLike) -> None:
        """Store *pixel* at ``(x, y)``."""

        offset = self._offset(x, y)
        self._data[offset : offset + 4] = Pixel.ensure(pixel).as_tuple()

    def pixels(self) -> Iterable[tuple[int, int, Pixel]]:
        """Yield ``(x, y, pixel)`` in row-major order."""

        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.get(x, y)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self._data)

    def assign(self, other: "PixelBuffer") -> None:
        """Overwrite this buffer's bytes with those of a same-sized *other*."""

        if other.dimension != self._dimension:
            raise BufferSizeError(
                f"cannot assign a {other.width}x{other.height} buffer to a "
                f"{self.width}x{self.height} buffer"
            )
        self._data[:] = other.data

    def resize(self, width: object, height: object) -> "PixelBuffer":
        """Return a new buffer of the requested size.

        Equal dimensions yield a plain copy; anything else is resampled by the
        Pillow surface adapter rather than by the filter engine.
        """

        dimension = Dimension(width, height)  # type: ignore[arg-type]
        if dimension == self._dimension:
            return self.copy()
        from ..surface.pillow_surface import resample

        return resample(self, dimension)

    def to_array(self) -> np.ndarray:
        """Return an ``(H, W, 4)`` copy of the pixel data."""

        return self._data.reshape((self.height, self.width, 4)).copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._dimension == other.dimension and bool(np.array_equal(self._data, other.data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
