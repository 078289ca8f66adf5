from __future__ import annotations

import datetime as dt
import logging
from collections import Counter
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError, DecodeError
from .models import DEFAULT_THEME, Link, Note

NOTE_SUFFIX = ".yaml"
NULL_TAG = "tag:yaml.org,2002:null"
STRING_FIELDS = ("slug", "title", "thesis", "quote", "example", "diagram", "theme")
LIST_FIELDS = ("bullets", "tags")

logger = logging.getLogger(__name__)


class FieldShapeError(ValueError):
    pass


class NoteLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as written; only null is resolved."""


NoteLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def as_text(value: Any, name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return str(value)
    raise FieldShapeError(f"field {name!r} must be a string, got {type(value).__name__}")


def as_list(value: Any, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FieldShapeError(f"field {name!r} must be a list, got {type(value).__name__}")
    return value


def parse_links(value: Any) -> tuple[Link, ...]:
    links = []
    for index, item in enumerate(as_list(value, "links")):
        if item is None:
            item = {}
        if not isinstance(item, dict):
            raise FieldShapeError(f"link at index {index} must be a mapping")
        links.append(
            Link(
                label=as_text(item.get("label"), f"links[{index}].label"),
                url=as_text(item.get("url"), f"links[{index}].url"),
            )
        )
    return tuple(links)


def parse_note(text: str, source: Path | None = None) -> Note:
    data = yaml.load(text, Loader=NoteLoader)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FieldShapeError(f"note record must be a mapping, got {type(data).__name__}")
    values: dict[str, Any] = {}
    for name in STRING_FIELDS:
        values[name] = as_text(data.get(name), name)
    for name in LIST_FIELDS:
        values[name] = tuple(
            as_text(item, f"{name}[{index}]") for index, item in enumerate(as_list(data.get(name), name))
        )
    values["links"] = parse_links(data.get("links"))
    if not values["theme"]:
        values["theme"] = DEFAULT_THEME
    return Note(source=source, **values)


def load_notes(content_dir: Path) -> list[Note]:
    if not content_dir.is_dir():
        raise ConfigError(f"content directory not found: {content_dir}")
    try:
        entries = sorted(content_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise DecodeError(content_dir, exc.strerror or str(exc)) from exc
    notes = []
    for path in entries:
        if path.is_dir() or not path.name.endswith(NOTE_SUFFIX):
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DecodeError(path, str(exc)) from exc
        try:
            note = parse_note(text, source=path)
        except (yaml.YAMLError, FieldShapeError) as exc:
            raise DecodeError(path, str(exc)) from exc
        logger.debug("loaded %s from %s", note.slug, path.name)
        notes.append(note)
    return notes


def sort_notes(notes: list[Note]) -> list[Note]:
    return sorted(notes, key=lambda note: note.slug.encode("utf-8"))


def find_duplicate_slugs(notes: list[Note]) -> list[str]:
    counts = Counter(note.slug for note in notes)
    return sorted(slug for slug, count in counts.items() if count > 1)
