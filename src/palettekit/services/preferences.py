"""Key-value preference stores used to remember the selected theme."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Protocol, runtime_checkable

__all__ = [
    "PERSISTENCE_KEY",
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "default_preference_store",
]

LOGGER = logging.getLogger(__name__)
PERSISTENCE_KEY = "Palette.currentTheme"
_PREFERENCES_DIR = Path.home() / ".palettekit"
_DEFAULT_PREFERENCES_PATH = _PREFERENCES_DIR / "preferences.json"
_DEFAULT_STORE: "JsonPreferenceStore | None" = None


@runtime_checkable
class PreferenceStore(Protocol):
    """Minimal durable string store keyed by string."""

    def get(self, key: str) -> str | None:  # pragma: no cover - Protocol placeholder
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - Protocol placeholder
        ...


class MemoryPreferenceStore:
    """Dictionary-backed store, handy for tests and short-lived sessions."""

    def __init__(self, values: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)


class JsonPreferenceStore:
    """Persistence adapter storing preferences as a flat JSON object on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else _DEFAULT_PREFERENCES_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def get(self, key: str) -> str | None:
        value = self._read_payload().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        payload = self._read_payload()
        payload[key] = value
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Preference %s saved to %s", key, self._path)

    def _read_payload(self) -> Dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Preferences file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Preferences file %s must contain a JSON object", self._path)
            return {}
        return payload


def default_preference_store() -> JsonPreferenceStore:
    """Return the process-wide store under ``~/.palettekit``."""

    global _DEFAULT_STORE
    if _DEFAULT_STORE is None:
        _DEFAULT_STORE = JsonPreferenceStore()
    return _DEFAULT_STORE
