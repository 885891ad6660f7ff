"""RGBA color value type and the hex string codec."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

from ..errors import InvalidHexColorError

FloatTuple = Tuple[float, float, float, float]

_HEX_DIGITS = frozenset(string.hexdigits)
_RGB_LENGTH = 6
_RGBA_LENGTH = 8


@dataclass(slots=True, frozen=True)
class Color:
    """Immutable sRGB color with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    CLEAR: ClassVar["Color"]

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channels must be within 0-255, received {channel!r}")

    @property
    def is_opaque(self) -> bool:
        return self.alpha == 255

    def to_float(self) -> FloatTuple:
        """Return the channels normalized to ``[0, 1]``."""

        return (self.red / 255, self.green / 255, self.blue / 255, self.alpha / 255)

    def to_hex(self, *, prefix: bool = False, alpha: bool | None = None) -> str:
        """Serialize to ``RRGGBB`` or ``RRGGBBAA``.

        ``alpha=None`` emits the alpha byte only when the color is translucent.
        """

        include_alpha = not self.is_opaque if alpha is None else alpha
        channels = [self.red, self.green, self.blue]
        if include_alpha:
            channels.append(self.alpha)
        digits = "".join(f"{channel:02X}" for channel in channels)
        return f"#{digits}" if prefix else digits

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        return parse_hex_or_fail(text)

    def __str__(self) -> str:
        return self.to_hex(prefix=True)


Color.CLEAR = Color(0, 0, 0, 0)


def parse_hex(text: Any) -> Color | None:
    """Parse ``#RRGGBB``/``#RRGGBBAA`` (leading ``#`` optional) into a :class:`Color`.

    Returns ``None`` for anything that is not a six or eight digit hex string.
    """

    if not isinstance(text, str):
        return None
    digits = text.strip().lstrip("#")
    if not digits or any(ch not in _HEX_DIGITS for ch in digits):
        return None

    value = int(digits, 16)
    if len(digits) == _RGB_LENGTH:
        return Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)
    if len(digits) == _RGBA_LENGTH:
        return Color((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    return None


def parse_hex_or_fail(text: Any) -> Color:
    """Strict variant of :func:`parse_hex` raising :class:`InvalidHexColorError`."""

    color = parse_hex(text)
    if color is None:
        raise InvalidHexColorError(text)
    return color


__all__ = ["Color", "FloatTuple", "parse_hex", "parse_hex_or_fail"]
