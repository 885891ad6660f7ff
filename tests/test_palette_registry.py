"""Tests for the theme registry."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from palettekit.errors import (
    InvalidThemeError,
    NoThemesAvailableError,
    ThemeFileNotFoundError,
    ThemeNotFoundError,
)
from palettekit.events import EventBus, ThemeChanged
from palettekit.services.preferences import PERSISTENCE_KEY, MemoryPreferenceStore
from palettekit.theme.colors import Color
from palettekit.theme.loader import DirectorySource, MemorySource, load_themes
from palettekit.theme.registry import FALLBACK_THEME_NAME, Palette, build_fallback_theme
from palettekit.theme.models import Theme


class FailingStore:
    """Store whose reads and writes always blow up."""

    def __init__(self) -> None:
        self.writes = 0

    def get(self, key: str) -> str | None:
        raise OSError("store offline")

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        raise OSError("store offline")


def test_available_names_are_sorted(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    assert palette.available_names() == ["Dark", "Light"]
    assert [theme.name for theme in palette.themes] == ["Light", "Dark"]


def test_first_theme_is_active_without_saved_or_default(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    assert palette.theme.name == "Light"
    assert palette.default_name is None


def test_default_name_is_used_when_nothing_saved(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", default_name="Dark", source=source, store=store)

    assert palette.theme.name == "Dark"


def test_unknown_default_name_falls_back_to_first_theme(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", default_name="Sepia", source=source, store=store)

    assert palette.theme.name == "Light"


def test_saved_selection_wins_over_default(source: MemorySource) -> None:
    store = MemoryPreferenceStore({PERSISTENCE_KEY: "Dark"})

    palette = Palette.open("themes", default_name="Light", source=source, store=store)

    assert palette.theme.name == "Dark"


def test_stale_saved_selection_is_ignored(source: MemorySource) -> None:
    store = MemoryPreferenceStore({PERSISTENCE_KEY: "Removed"})

    palette = Palette.open("themes", default_name="Dark", source=source, store=store)

    assert palette.theme.name == "Dark"


def test_store_read_failure_counts_as_nothing_saved(source: MemorySource, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        palette = Palette.open("themes", default_name="Dark", source=source, store=FailingStore())

    assert palette.theme.name == "Dark"
    assert any("saved theme selection" in record.message for record in caplog.records)


def test_open_raises_when_document_is_empty(store: MemoryPreferenceStore) -> None:
    with pytest.raises(NoThemesAvailableError) as excinfo:
        Palette.open("themes", source=MemorySource({"themes": "[]"}), store=store)

    assert str(excinfo.value) == "[Palette] No themes were found to be available."


def test_construction_does_not_persist(source: MemorySource, store: MemoryPreferenceStore) -> None:
    Palette.open("themes", default_name="Dark", source=source, store=store)

    assert store.get(PERSISTENCE_KEY) is None


def test_set_active_by_name_switches_and_persists(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    palette.set_active_by_name("Dark")

    assert palette.theme.name == "Dark"
    assert store.get(PERSISTENCE_KEY) == "Dark"
    assert palette.color("background") == Color(0, 0, 0)
    assert palette.get("missing") is None


def test_set_active_by_unknown_name_leaves_active_theme(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    with pytest.raises(ThemeNotFoundError) as excinfo:
        palette.set_active_by_name("Nonexistent")

    assert excinfo.value.name == "Nonexistent"
    assert palette.theme.name == "Light"
    assert store.get(PERSISTENCE_KEY) is None


def test_set_active_requires_structural_membership(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)
    copy_of_dark = Theme(name="Dark", colors=dict(palette.themes[1].colors))
    impostor = Theme(name="Dark", colors={"primary": Color(1, 2, 3)})

    palette.set_active(copy_of_dark)
    assert palette.theme == copy_of_dark

    with pytest.raises(ThemeNotFoundError):
        palette.set_active(impostor)
    assert palette.theme == copy_of_dark


def test_has_checks_names(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    assert palette.has("Light")
    assert not palette.has("light")


def test_reset_to_default_without_default_fails(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    with pytest.raises(ThemeNotFoundError) as excinfo:
        palette.reset_to_default()

    assert excinfo.value.name == "No default theme specified"


def test_reset_to_default_activates_default(source: MemorySource) -> None:
    store = MemoryPreferenceStore({PERSISTENCE_KEY: "Light"})
    palette = Palette.open("themes", default_name="Dark", source=source, store=store)
    assert palette.theme.name == "Light"

    palette.reset_to_default()

    assert palette.theme.name == "Dark"
    assert store.get(PERSISTENCE_KEY) == "Dark"


def test_observers_see_switch_after_persistence(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)
    received: list[tuple[str, str, str | None]] = []

    def on_change(event: ThemeChanged) -> None:
        received.append((event.previous.name, event.current.name, store.get(PERSISTENCE_KEY)))
        assert palette.theme is event.current

    palette.subscribe(on_change)
    palette.set_active_by_name("Dark")
    palette.unsubscribe(on_change)
    palette.set_active_by_name("Light")

    assert received == [("Light", "Dark", "Dark")]


def test_failed_write_still_switches_theme(source: MemorySource, caplog: pytest.LogCaptureFixture) -> None:
    failing = FailingStore()
    events = EventBus()
    received: list[ThemeChanged] = []
    events.subscribe(ThemeChanged, received.append)
    palette = Palette.open("themes", source=source, store=failing, events=events)

    with caplog.at_level(logging.WARNING):
        palette.set_active_by_name("Dark")

    assert palette.theme.name == "Dark"
    assert failing.writes == 1
    assert [event.persisted for event in received] == [False]
    assert any("Failed to persist" in record.message for record in caplog.records)


def test_duplicate_names_resolve_to_first_match(store: MemoryPreferenceStore) -> None:
    document = [
        {"name": "Twin", "colors": {"primary": "#111111"}},
        {"name": "Twin", "colors": {"primary": "#222222"}},
    ]
    palette = Palette.open("themes", source=MemorySource({"themes": json.dumps(document)}), store=store)

    palette.set_active_by_name("Twin")

    assert palette.color("primary") == Color(0x11, 0x11, 0x11)
    assert palette.available_names() == ["Twin", "Twin"]


def test_open_or_none_returns_none_on_failure(store: MemoryPreferenceStore, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        palette = Palette.open_or_none("missing", source=MemorySource(), store=store)

    assert palette is None
    assert any("Failed to create palette" in record.message for record in caplog.records)


def test_open_or_none_returns_palette_on_success(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open_or_none("themes", "Dark", source, store=store)

    assert palette is not None
    assert palette.theme.name == "Dark"


def test_open_with_fallback_on_missing_resource(store: MemoryPreferenceStore) -> None:
    palette = Palette.open_with_fallback("missing", default_name="Dark", source=MemorySource(), store=store)

    assert palette.theme.name == FALLBACK_THEME_NAME
    assert palette.theme.color_names == ["accent", "background", "primary", "secondary", "text"]
    assert palette.available_names() == [FALLBACK_THEME_NAME]
    assert palette.default_name == FALLBACK_THEME_NAME
    assert palette.color("text") == Color(0, 0, 0)


def test_open_with_fallback_survives_excessive_nesting(store: MemoryPreferenceStore) -> None:
    source = MemorySource({"themes": "[" * 100_000 + "]" * 100_000})

    assert Palette.open_or_none("themes", source=source, store=store) is None
    palette = Palette.open_with_fallback("themes", source=source, store=store)

    assert palette.theme.name == FALLBACK_THEME_NAME


def test_open_with_fallback_ignores_saved_selection() -> None:
    store = MemoryPreferenceStore({PERSISTENCE_KEY: "Dark"})

    palette = Palette.open_with_fallback("missing", source=MemorySource(), store=store)

    assert palette.theme == build_fallback_theme()
    palette.reset_to_default()
    assert store.get(PERSISTENCE_KEY) == FALLBACK_THEME_NAME


def test_open_with_fallback_prefers_real_document(source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open_with_fallback("themes", "Dark", source, store=store)

    assert palette.theme.name == "Dark"


def test_from_themes_revalidates_programmatic_themes(store: MemoryPreferenceStore) -> None:
    with pytest.raises(InvalidThemeError):
        Palette.from_themes([Theme(name="Blank")], store=store)
    with pytest.raises(NoThemesAvailableError):
        Palette.from_themes([], store=store)


def test_validate_document_checks_without_registry(source: MemorySource, store: MemoryPreferenceStore) -> None:
    themes = Palette.validate_document("themes", source)

    assert [theme.name for theme in themes] == ["Light", "Dark"]
    with pytest.raises(ThemeFileNotFoundError):
        Palette.validate_document("test", MemorySource())


def test_export_document_round_trips(tmp_path: Path, source: MemorySource, store: MemoryPreferenceStore) -> None:
    palette = Palette.open("themes", source=source, store=store)

    exported = palette.export_document(tmp_path / "exported.json")

    assert load_themes(exported.stem, source=DirectorySource(tmp_path)) == palette.themes
