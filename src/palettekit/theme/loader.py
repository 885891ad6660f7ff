"""Themes document loading: resource lookup, JSON decoding, and shape checks."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence, Tuple, runtime_checkable

import jsonschema

from ..errors import MalformedJSONError, ThemeDecodingError, ThemeFileNotFoundError
from .models import Theme

LOGGER = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".json"

THEME_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["name", "colors"],
        "properties": {
            "name": {"type": "string"},
            "colors": {
                "type": "object",
                "additionalProperties": {"type": "string"},
            },
        },
    },
}

_SCHEMA_TYPE_NAMES = {
    "array": "array",
    "object": "dictionary",
    "string": "string",
}


@runtime_checkable
class Resource(Protocol):
    """Anything that can hand back the raw bytes of a document."""

    def read_bytes(self) -> bytes:  # pragma: no cover - Protocol placeholder
        ...


class ResourceSource(Protocol):
    """Resolves a document name to a readable :class:`Resource`."""

    def resolve(self, name: str) -> Resource | None:  # pragma: no cover - Protocol placeholder
        ...


class DirectorySource:
    """Looks documents up as ``<root>/<name>.json`` on the filesystem."""

    def __init__(self, root: str | Path = ".") -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, name: str) -> Path | None:
        path = self._root / document_filename(name)
        return path if path.is_file() else None

    def __repr__(self) -> str:
        return f"DirectorySource({str(self._root)!r})"


class PackageSource:
    """Looks documents up inside an importable package's data files."""

    def __init__(self, package: str) -> None:
        self._package = package

    def resolve(self, name: str) -> Resource | None:
        try:
            candidate = resources.files(self._package).joinpath(document_filename(name))
        except ModuleNotFoundError:
            return None
        return candidate if candidate.is_file() else None

    def __repr__(self) -> str:
        return f"PackageSource({self._package!r})"


@dataclass(slots=True, frozen=True)
class _MemoryResource:
    payload: bytes

    def read_bytes(self) -> bytes:
        return self.payload


class MemorySource:
    """Serves documents from an in-memory ``name -> bytes | str`` mapping."""

    def __init__(self, documents: Mapping[str, bytes | str] | None = None) -> None:
        self._documents: dict[str, bytes] = {}
        for name, payload in (documents or {}).items():
            self.add(name, payload)

    def add(self, name: str, payload: bytes | str) -> None:
        data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        self._documents[document_filename(name)] = data

    def resolve(self, name: str) -> Resource | None:
        data = self._documents.get(document_filename(name))
        return None if data is None else _MemoryResource(data)

    def __repr__(self) -> str:
        return f"MemorySource({sorted(self._documents)!r})"


def document_filename(name: str) -> str:
    return name if name.endswith(DOCUMENT_SUFFIX) else f"{name}{DOCUMENT_SUFFIX}"


class ThemeLoader:
    """Reads a themes document from a :class:`ResourceSource` into themes."""

    def __init__(self, source: ResourceSource | None = None) -> None:
        self._source: ResourceSource = source if source is not None else DirectorySource()

    @property
    def source(self) -> ResourceSource:
        return self._source

    def load(self, name: str) -> Tuple[Theme, ...]:
        data = self.read(name)
        records = decode_document(data)
        themes = tuple(Theme.from_dict(record) for record in records)
        LOGGER.debug("Loaded %d theme(s) from %s via %r", len(themes), name, self._source)
        return themes

    def read(self, name: str) -> bytes:
        resource = self._source.resolve(name)
        if resource is None:
            raise ThemeFileNotFoundError(name)
        try:
            return resource.read_bytes()
        except OSError as exc:
            raise ThemeFileNotFoundError(name, str(exc) or type(exc).__name__) from exc


def load_themes(name: str, source: ResourceSource | None = None) -> Tuple[Theme, ...]:
    """Load and validate every theme in ``name``; the first invalid theme aborts the load."""

    return ThemeLoader(source).load(name)


def decode_document(data: bytes) -> list[Mapping[str, Any]]:
    """Decode raw bytes into theme records, enforcing :data:`THEME_DOCUMENT_SCHEMA`."""

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedJSONError(f"Document is not valid UTF-8: {exc.reason}") from exc
    try:
        payload = json.loads(text)
    except JSONDecodeError as exc:
        raise MalformedJSONError(_format_json_decode_message(exc)) from exc
    except RecursionError as exc:
        raise MalformedJSONError("Document is nested too deeply to decode") from exc

    validator = jsonschema.Draft202012Validator(THEME_DOCUMENT_SCHEMA)
    issues = sorted(validator.iter_errors(payload), key=_issue_sort_key)
    if issues:
        raise ThemeDecodingError(_format_schema_issue(issues[0]))
    return payload


def dump_themes(themes: Iterable[Theme], *, indent: int | None = 2) -> str:
    """Serialize ``themes`` back into the document format."""

    return json.dumps([theme.to_dict() for theme in themes], indent=indent)


def _issue_sort_key(issue: jsonschema.ValidationError) -> tuple:
    return tuple(str(segment) if isinstance(segment, str) else f"{segment:010d}" for segment in issue.absolute_path)


def _format_schema_issue(issue: jsonschema.ValidationError) -> str:
    path = _format_path(issue.absolute_path)
    if issue.validator == "required":
        missing = _missing_key(issue)
        return f"Key '{missing}' not found at path: {path}"
    if issue.validator == "type":
        expected = _SCHEMA_TYPE_NAMES.get(str(issue.validator_value), str(issue.validator_value))
        if issue.instance is None:
            return f"Value not found for type {expected} at path: {path}"
        return f"Type mismatch for type {expected} at path: {path}"
    return f"Data corrupted at path: {path} - {issue.message}"


def _missing_key(issue: jsonschema.ValidationError) -> str:
    instance = issue.instance if isinstance(issue.instance, Mapping) else {}
    for key in issue.validator_value or ():
        if key not in instance:
            return str(key)
    return "?"


def _format_path(path: Sequence[Any]) -> str:
    if not path:
        return "<root>"
    return ".".join(str(segment) for segment in path)


def _format_json_decode_message(exc: JSONDecodeError) -> str:
    lines = exc.doc.splitlines() if exc.doc else []
    snippet = lines[exc.lineno - 1].strip() if 0 < exc.lineno <= len(lines) else ""
    detail = exc.msg
    if snippet:
        return f"{detail} (line {exc.lineno}, column {exc.colno}): {snippet}"
    return f"{detail} (line {exc.lineno}, column {exc.colno})"


__all__ = [
    "DOCUMENT_SUFFIX",
    "DirectorySource",
    "MemorySource",
    "PackageSource",
    "Resource",
    "ResourceSource",
    "THEME_DOCUMENT_SCHEMA",
    "ThemeLoader",
    "decode_document",
    "document_filename",
    "dump_themes",
    "load_themes",
]
