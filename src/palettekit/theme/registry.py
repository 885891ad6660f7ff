"""Theme registry owning the theme set, the active theme, and its persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from ..errors import NoThemesAvailableError, PaletteError, ThemeNotFoundError
from ..events import EventBus, Handler, ThemeChanged
from ..services.preferences import PERSISTENCE_KEY, PreferenceStore, default_preference_store
from .colors import Color, parse_hex_or_fail
from .loader import ResourceSource, dump_themes, load_themes
from .models import Theme, validate_theme_set

LOGGER = logging.getLogger(__name__)

FALLBACK_THEME_NAME = "Fallback"
_FALLBACK_COLORS = {
    "primary": "#0000FF",
    "secondary": "#808080",
    "background": "#FFFFFF",
    "text": "#000000",
    "accent": "#FF0000",
}


def build_fallback_theme() -> Theme:
    return Theme(
        name=FALLBACK_THEME_NAME,
        colors={key: parse_hex_or_fail(value) for key, value in _FALLBACK_COLORS.items()},
    )


class Palette:
    """Registry of themes with a single persisted, observable active theme.

    Instances are created through :meth:`open`, :meth:`open_or_none`,
    :meth:`open_with_fallback` or :meth:`from_themes`; each either returns a
    fully resolved palette or raises. The constructor itself trusts its
    arguments and performs no validation.
    """

    def __init__(
        self,
        themes: Sequence[Theme],
        active: Theme,
        *,
        default_name: str | None = None,
        store: PreferenceStore | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._themes: Tuple[Theme, ...] = tuple(themes)
        self._theme = active
        self._default_name = default_name
        self._store: PreferenceStore = store if store is not None else default_preference_store()
        self._events: EventBus = events if events is not None else EventBus()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def open(
        cls,
        name: str,
        default_name: str | None = None,
        source: ResourceSource | None = None,
        *,
        store: PreferenceStore | None = None,
        events: EventBus | None = None,
    ) -> "Palette":
        """Load ``name`` from ``source`` and resolve the initial active theme.

        Resolution order: the persisted selection, then ``default_name``, then
        the first theme in document order.
        """

        themes = load_themes(name, source)
        return cls.from_themes(themes, default_name, store=store, events=events)

    @classmethod
    def from_themes(
        cls,
        themes: Iterable[Theme],
        default_name: str | None = None,
        *,
        store: PreferenceStore | None = None,
        events: EventBus | None = None,
    ) -> "Palette":
        theme_set = tuple(themes)
        if not theme_set:
            raise NoThemesAvailableError()
        validate_theme_set(theme_set)

        resolved_store = store if store is not None else default_preference_store()
        saved_name = _read_saved_name(resolved_store)
        active = (
            _first_named(theme_set, saved_name)
            or _first_named(theme_set, default_name)
            or (theme_set[0] if theme_set else None)
        )
        if active is None:  # pragma: no cover - emptiness checked above
            raise NoThemesAvailableError()

        LOGGER.debug(
            "Palette ready with %d theme(s); active=%s (saved=%s, default=%s)",
            len(theme_set),
            active.name,
            saved_name,
            default_name,
        )
        return cls(theme_set, active, default_name=default_name, store=resolved_store, events=events)

    @classmethod
    def open_or_none(
        cls,
        name: str,
        default_name: str | None = None,
        source: ResourceSource | None = None,
        *,
        store: PreferenceStore | None = None,
        events: EventBus | None = None,
    ) -> "Palette | None":
        """Like :meth:`open` but returns ``None`` instead of raising."""

        try:
            return cls.open(name, default_name, source, store=store, events=events)
        except PaletteError as exc:
            LOGGER.warning("Failed to create palette from %s: %s", name, exc)
            return None

    @classmethod
    def open_with_fallback(
        cls,
        name: str,
        default_name: str | None = None,
        source: ResourceSource | None = None,
        *,
        store: PreferenceStore | None = None,
        events: EventBus | None = None,
    ) -> "Palette":
        """Like :meth:`open_or_none`, but falls back to the built-in theme."""

        palette = cls.open_or_none(name, default_name, source, store=store, events=events)
        if palette is not None:
            return palette
        fallback = build_fallback_theme()
        LOGGER.warning("Using built-in '%s' theme", fallback.name)
        return cls([fallback], fallback, default_name=fallback.name, store=store, events=events)

    @staticmethod
    def validate_document(name: str, source: ResourceSource | None = None) -> Tuple[Theme, ...]:
        """Run the full load-and-validate pipeline without building a palette."""

        themes = load_themes(name, source)
        validate_theme_set(themes)
        return themes

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def themes(self) -> Tuple[Theme, ...]:
        return self._themes

    @property
    def default_name(self) -> str | None:
        return self._default_name

    @property
    def store(self) -> PreferenceStore:
        return self._store

    @property
    def events(self) -> EventBus:
        return self._events

    def get(self, color_name: str) -> Color | None:
        return self._theme.get(color_name)

    def color(self, color_name: str, fallback: Color = Color.CLEAR) -> Color:
        return self._theme.color(color_name, fallback)

    def available_names(self) -> List[str]:
        return sorted(theme.name for theme in self._themes)

    def has(self, name: str) -> bool:
        return any(theme.name == name for theme in self._themes)

    # ------------------------------------------------------------------
    # Switching
    # ------------------------------------------------------------------
    def set_active(self, theme: Theme) -> None:
        """Activate ``theme`` and remember it in the preference store.

        A failed store write is logged but does not undo the switch.
        """

        if theme not in self._themes:
            raise ThemeNotFoundError(theme.name)

        previous = self._theme
        self._theme = theme
        persisted = self._persist(theme.name)
        LOGGER.info("Active theme changed from %s to %s", previous.name, theme.name)
        self._events.publish(ThemeChanged(previous=previous, current=theme, persisted=persisted))

    def set_active_by_name(self, name: str) -> None:
        theme = _first_named(self._themes, name)
        if theme is None:
            raise ThemeNotFoundError(name)
        self.set_active(theme)

    def reset_to_default(self) -> None:
        if self._default_name is None:
            raise ThemeNotFoundError("No default theme specified")
        self.set_active_by_name(self._default_name)

    def subscribe(self, handler: Handler[ThemeChanged]) -> None:
        self._events.subscribe(ThemeChanged, handler)

    def unsubscribe(self, handler: Handler[ThemeChanged]) -> None:
        self._events.unsubscribe(ThemeChanged, handler)

    def export_document(self, destination: str | Path, *, indent: int = 2) -> Path:
        """Write the current theme set to ``destination`` in the document format."""

        path = Path(destination)
        path.write_text(dump_themes(self._themes, indent=indent), encoding="utf-8")
        return path

    def _persist(self, name: str) -> bool:
        try:
            self._store.set(PERSISTENCE_KEY, name)
        except Exception as exc:
            LOGGER.warning("Failed to persist theme selection %s: %s", name, exc)
            return False
        return True

    def __repr__(self) -> str:
        return f"Palette(active={self._theme.name!r}, themes={self.available_names()!r})"


def _first_named(themes: Sequence[Theme], name: str | None) -> Theme | None:
    if name is None:
        return None
    return next((theme for theme in themes if theme.name == name), None)


def _read_saved_name(store: PreferenceStore) -> str | None:
    try:
        value = store.get(PERSISTENCE_KEY)
    except Exception as exc:
        LOGGER.warning("Could not read saved theme selection: %s", exc)
        return None
    return value if isinstance(value, str) else None


__all__ = ["FALLBACK_THEME_NAME", "Palette", "build_fallback_theme"]
