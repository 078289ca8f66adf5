"""Structural checks for note records.

These run independently of the build: ``notesite check`` reports every
problem it finds, while ``notesite build`` renders whatever it can decode.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .content import NOTE_SUFFIX, find_duplicate_slugs
from .models import Note

SLUG_RE = re.compile(r"^[a-z0-9-]+$")


@dataclass(frozen=True)
class ValidationIssue:
    source: Optional[Path]
    field: str
    message: str

    def __str__(self) -> str:
        where = self.source.name if self.source is not None else "<memory>"
        return f"{where}: {self.field}: {self.message}"


def validate_note(note: Note) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    def report(field: str, message: str) -> None:
        issues.append(ValidationIssue(note.source, field, message))

    for name in ("slug", "title", "thesis"):
        if not getattr(note, name):
            report(name, f"{name} field is required but missing or empty")
    for name in ("bullets", "tags"):
        if not getattr(note, name):
            report(name, f"{name} field is required but missing or empty")

    if note.slug:
        if " " in note.slug:
            report("slug", "slug should not contain spaces")
        if note.slug.lower() != note.slug:
            report("slug", "slug should be lowercase")
        if not SLUG_RE.match(note.slug):
            report("slug", "slug should only contain lowercase letters, numbers, and hyphens")

    for index, bullet in enumerate(note.bullets):
        if not bullet.strip():
            report("bullets", f"bullet at index {index} is empty or whitespace only")
    for index, tag in enumerate(note.tags):
        if not tag.strip():
            report("tags", f"tag at index {index} is empty or whitespace only")

    for index, link in enumerate(note.links):
        if not link.label:
            report("links", f"link at index {index} is missing label")
        if not link.url:
            report("links", f"link at index {index} is missing url")
        elif not link.url.startswith(("http://", "https://")):
            report(
                "links",
                f"link at index {index} has invalid URL {link.url!r}, should start with http:// or https://",
            )

    if not note.theme.strip():
        report("theme", "theme field should not be whitespace only if present")

    if note.source is not None:
        expected = note.slug + NOTE_SUFFIX
        if note.source.name != expected:
            report("slug", f"filename {note.source.name!r} does not match slug {note.slug!r} (expected {expected!r})")
    return issues


def validate(notes: list[Note]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for note in notes:
        issues.extend(validate_note(note))
    for slug in find_duplicate_slugs(notes):
        sources = [note.source for note in notes if note.slug == slug]
        for source in sources:
            issues.append(ValidationIssue(source, "slug", f"slug {slug!r} is used by {len(sources)} notes"))
    return issues
