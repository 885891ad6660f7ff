"""Data structures describing palettekit themes and their validation rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping

from ..errors import InvalidThemeError
from .colors import Color, parse_hex

_EMPTY_COLORS_DETAIL = "must contain at least one color"


@dataclass(frozen=True)
class Theme:
    """Named, immutable mapping of color names to :class:`Color` values.

    Lookups are case-sensitive. Construct themes from raw documents through
    :meth:`from_dict`, which validates; the plain constructor does not.
    """

    name: str
    colors: Mapping[str, Color] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Theme):
            return NotImplemented
        return self.name == other.name and dict(self.colors) == dict(other.colors)

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.colors.items())))

    def __len__(self) -> int:
        return len(self.colors)

    def __contains__(self, color_name: object) -> bool:
        return color_name in self.colors

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    @property
    def color_names(self) -> List[str]:
        return sorted(self.colors)

    def has_color(self, color_name: str) -> bool:
        return color_name in self.colors

    def get(self, color_name: str) -> Color | None:
        return self.colors.get(color_name)

    def color(self, color_name: str, fallback: Color = Color.CLEAR) -> Color:
        """Return the named color, or ``fallback`` when the theme lacks it."""

        found = self.colors.get(color_name)
        return fallback if found is None else found

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "colors": {key: value.to_hex(prefix=True) for key, value in self.colors.items()},
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Theme":
        """Build a validated theme from a ``{"name", "colors"}`` record."""

        name = str(payload.get("name") or "")
        _require_name(name)
        colors = validate_colors(payload.get("colors") or {})
        return cls(name=name, colors=colors)


def validate_colors(raw: Mapping[str, Any]) -> Dict[str, Color]:
    """Parse every ``name -> hex`` entry, reporting all invalid entries together."""

    parsed: Dict[str, Color] = {}
    invalid: List[str] = []
    for key, value in raw.items():
        color = parse_hex(value)
        if color is None:
            invalid.append(f"{key}: {value}")
            continue
        parsed[key] = color

    if invalid:
        raise InvalidThemeError(f"Invalid hex colors: {', '.join(invalid)}")
    if not parsed:
        raise InvalidThemeError(f"Theme {_EMPTY_COLORS_DETAIL}")
    return parsed


def validate_structure(theme: Theme) -> None:
    """Check the name and color-count invariants of an already built theme."""

    _require_name(theme.name)
    if not theme.colors:
        raise InvalidThemeError(f"Theme '{theme.name}' {_EMPTY_COLORS_DETAIL}")


def validate_theme_set(themes: Iterable[Theme]) -> None:
    for theme in themes:
        validate_structure(theme)


def _require_name(name: str) -> None:
    if not name:
        raise InvalidThemeError("Theme name cannot be empty")


__all__ = ["Theme", "validate_colors", "validate_structure", "validate_theme_set"]
