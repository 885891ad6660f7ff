"""palettekit: JSON-defined color themes with a persisted active selection."""

from .errors import (
    InvalidHexColorError,
    InvalidThemeError,
    MalformedJSONError,
    NoThemesAvailableError,
    PaletteError,
    ThemeDecodingError,
    ThemeFileNotFoundError,
    ThemeNotFoundError,
)
from .events import EventBus, ThemeChanged
from .services.preferences import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore
from .theme import (
    Color,
    DirectorySource,
    MemorySource,
    PackageSource,
    Palette,
    Theme,
    parse_hex,
    parse_hex_or_fail,
)

__version__ = "0.1.0"

SAMPLE_PACKAGE = "palettekit.data"

__all__ = [
    "Color",
    "DirectorySource",
    "EventBus",
    "InvalidHexColorError",
    "InvalidThemeError",
    "JsonPreferenceStore",
    "MalformedJSONError",
    "MemoryPreferenceStore",
    "MemorySource",
    "NoThemesAvailableError",
    "PackageSource",
    "Palette",
    "PaletteError",
    "PreferenceStore",
    "SAMPLE_PACKAGE",
    "Theme",
    "ThemeChanged",
    "ThemeDecodingError",
    "ThemeFileNotFoundError",
    "ThemeNotFoundError",
    "parse_hex",
    "parse_hex_or_fail",
]
