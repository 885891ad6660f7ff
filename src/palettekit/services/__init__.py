"""Service layer helpers (preference persistence)."""

from .preferences import (
    PERSISTENCE_KEY,
    JsonPreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    default_preference_store,
)

__all__ = [
    "PERSISTENCE_KEY",
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "default_preference_store",
]
