"""Error taxonomy shared by the palettekit loading, validation, and registry layers.

Every error renders with the ``[Palette]`` tag so log lines can be filtered
regardless of which layer raised them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

ERROR_TAG = "[Palette]"


class ErrorCode:
    """Machine-readable identifiers for each error kind."""

    FILE_NOT_FOUND = "file_not_found"
    NO_THEMES_AVAILABLE = "no_themes_available"
    INVALID_HEX_COLOR = "invalid_hex_color"
    MALFORMED_JSON = "malformed_json"
    THEME_NOT_FOUND = "theme_not_found"
    INVALID_THEME = "invalid_theme"
    DECODING_ERROR = "decoding_error"


@dataclass
class PaletteError(Exception):
    """Base exception class for every palettekit failure."""

    code: ClassVar[str] = "palette_error"

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    @property
    def message(self) -> str:
        return "Unknown palette error"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary suitable for structured logs."""
        return {"error": self.code, "message": self.message}

    def __str__(self) -> str:
        return f"{ERROR_TAG} {self.message}"


@dataclass
class ThemeFileNotFoundError(PaletteError):
    """The themes document could not be located or read."""

    resource: str
    reason: str | None = None

    code: ClassVar[str] = ErrorCode.FILE_NOT_FOUND

    @property
    def message(self) -> str:
        filename = self.resource if self.resource.endswith(".json") else f"{self.resource}.json"
        if self.reason:
            return f"Theme file {filename} not found: {self.reason}"
        return f"Theme file {filename} not found."


@dataclass
class NoThemesAvailableError(PaletteError):
    """The decoded document contained zero themes."""

    code: ClassVar[str] = ErrorCode.NO_THEMES_AVAILABLE

    @property
    def message(self) -> str:
        return "No themes were found to be available."


@dataclass
class InvalidHexColorError(PaletteError):
    """A single hex string failed to parse."""

    value: Any

    code: ClassVar[str] = ErrorCode.INVALID_HEX_COLOR

    @property
    def message(self) -> str:
        return f"Invalid hex color format: {self.value}"


@dataclass
class MalformedJSONError(PaletteError):
    """The document is not syntactically valid JSON."""

    details: str

    code: ClassVar[str] = ErrorCode.MALFORMED_JSON

    @property
    def message(self) -> str:
        return f"Malformed JSON: {self.details}"


@dataclass
class ThemeNotFoundError(PaletteError):
    """A requested theme is not part of the active theme set."""

    name: str

    code: ClassVar[str] = ErrorCode.THEME_NOT_FOUND

    @property
    def message(self) -> str:
        return f"Theme '{self.name}' not found in available themes."


@dataclass
class InvalidThemeError(PaletteError):
    """Structural or color-content validation failed."""

    details: str

    code: ClassVar[str] = ErrorCode.INVALID_THEME

    @property
    def message(self) -> str:
        return f"Invalid theme: {self.details}"


@dataclass
class ThemeDecodingError(PaletteError):
    """The JSON document does not have the expected shape."""

    details: str

    code: ClassVar[str] = ErrorCode.DECODING_ERROR

    @property
    def message(self) -> str:
        return f"Decoding error: {self.details}"


__all__ = [
    "ERROR_TAG",
    "ErrorCode",
    "InvalidHexColorError",
    "InvalidThemeError",
    "MalformedJSONError",
    "NoThemesAvailableError",
    "PaletteError",
    "ThemeDecodingError",
    "ThemeFileNotFoundError",
    "ThemeNotFoundError",
]
