"""Shared pytest fixtures."""

from __future__ import annotations

import json

import pytest

from palettekit.services.preferences import MemoryPreferenceStore
from palettekit.theme.loader import MemorySource

LIGHT_DARK_DOCUMENT = [
    {
        "name": "Light",
        "colors": {
            "primary": "#FF0000",
            "secondary": "#00FF00",
            "background": "#FFFFFF",
        },
    },
    {
        "name": "Dark",
        "colors": {
            "primary": "#FF0000",
            "secondary": "#00FF00",
            "background": "#000000",
        },
    },
]


@pytest.fixture
def store() -> MemoryPreferenceStore:
    return MemoryPreferenceStore()


@pytest.fixture
def source() -> MemorySource:
    return MemorySource({"themes": json.dumps(LIGHT_DARK_DOCUMENT)})
