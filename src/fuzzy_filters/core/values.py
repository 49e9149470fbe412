"""Small value types with clamped construction.

Filter parameters arriving from callers are never validated by raising.
Instead the constructors below coerce whatever they receive into the closest
valid value, so a chain of filters keeps running on sloppy input.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence

CHANNEL_MIN = 0
CHANNEL_MAX = 255


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def coerce_int(value: object, default: int = 0) -> int:
    """Return *value* as an ``int`` truncated toward zero, or *default*."""

    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    if _is_number(value):
        numeric = float(value)  # type: ignore[arg-type]
        if math.isfinite(numeric):
            return int(numeric)
    return default


def coerce_float(value: object, default: float = 0.0) -> float:
    """Return *value* as a finite ``float``, or *default*."""

    if _is_number(value):
        numeric = float(value)  # type: ignore[arg-type]
        if math.isfinite(numeric):
            return numeric
    return default


def clamp_channel(value: object, default: int = 0) -> int:
    """Return *value* constrained to ``[0, 255]``.

    Floats are truncated, infinities clamp to the nearest bound and anything
    non-numeric (including ``NaN``) yields *default*.
    """

    if not _is_number(value):
        return default
    numeric = float(value)  # type: ignore[arg-type]
    if math.isnan(numeric):
        return default
    if numeric <= CHANNEL_MIN:
        return CHANNEL_MIN
    if numeric >= CHANNEL_MAX:
        return CHANNEL_MAX
    return int(numeric)


@dataclass(frozen=True)
class Pixel:
    """One RGBA pixel with every channel held in ``[0, 255]``."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = CHANNEL_MAX

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", clamp_channel(self.r))
        object.__setattr__(self, "g", clamp_channel(self.g))
        object.__setattr__(self, "b", clamp_channel(self.b))
        object.__setattr__(self, "a", clamp_channel(self.a, CHANNEL_MAX))

    @classmethod
    def ensure(cls, value: "Pixel | Mapping[str, object] | Sequence[object]") -> "Pixel":
        """Return *value* as a :class:`Pixel`.

        Mappings are read through their ``r``/``g``/``b``/``a`` keys and
        sequences positionally; missing entries take the usual defaults.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                value.get("r"),  # type: ignore[arg-type]
                value.get("g"),  # type: ignore[arg-type]
                value.get("b"),  # type: ignore[arg-type]
                value.get("a", CHANNEL_MAX),  # type: ignore[arg-type]
            )
        items = list(value)
        items += [None] * (3 - len(items))
        alpha = items[3] if len(items) > 3 else CHANNEL_MAX
        return cls(items[0], items[1], items[2], alpha)  # type: ignore[arg-type]

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class Dimension:
    """Width and height of a pixel grid; invalid input collapses to ``0``."""

    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", max(0, coerce_int(self.width)))
        object.__setattr__(self, "height", max(0, coerce_int(self.height)))

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def byte_length(self) -> int:
        """Number of RGBA bytes needed to store a grid of this size."""

        return self.area * 4


class Channel(str, Enum):
    """Colour channel tokens accepted by the channel filter and invert."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    NONE = "none"

    @property
    def index(self) -> int:
        """Byte offset of the channel inside a pixel, ``-1`` for ``NONE``."""

        if self is Channel.NONE:
            return -1
        return ("red", "green", "blue").index(self.value)

    @classmethod
    def parse(cls, value: object) -> Optional["Channel"]:
        """Return the member named by *value* (case-insensitive) or ``None``."""

        return _parse_token(cls, value)


class Direction(str, Enum):
    """Orientation of the motion blur window."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value: object) -> Optional["Direction"]:
        return _parse_token(cls, value)


def _parse_token(enum_cls, value: object):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in enum_cls:
            if member.value == key:
                return member
    return None


__all__ = [
    "CHANNEL_MAX",
    "CHANNEL_MIN",
    "Channel",
    "Dimension",
    "Direction",
    "Pixel",
    "clamp_channel",
    "coerce_float",
    "coerce_int",
]
