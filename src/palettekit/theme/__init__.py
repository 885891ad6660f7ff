"""Theme module consolidating color parsing, document loading, and the registry."""

from .colors import Color, parse_hex, parse_hex_or_fail
from .loader import (
    DirectorySource,
    MemorySource,
    PackageSource,
    ResourceSource,
    ThemeLoader,
    dump_themes,
    load_themes,
)
from .models import Theme, validate_colors, validate_structure, validate_theme_set
from .registry import FALLBACK_THEME_NAME, Palette, build_fallback_theme

__all__ = [
    "Color",
    "DirectorySource",
    "FALLBACK_THEME_NAME",
    "MemorySource",
    "PackageSource",
    "Palette",
    "ResourceSource",
    "Theme",
    "ThemeLoader",
    "build_fallback_theme",
    "dump_themes",
    "load_themes",
    "parse_hex",
    "parse_hex_or_fail",
    "validate_colors",
    "validate_structure",
    "validate_theme_set",
]
