from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_THEME = "default"


@dataclass(frozen=True)
class Link:
    label: str = ""
    url: str = ""


@dataclass(frozen=True)
class Note:
    """One published note, decoded from a single YAML record."""

    slug: str = ""
    title: str = ""
    thesis: str = ""
    quote: str = ""
    bullets: tuple[str, ...] = ()
    example: str = ""
    diagram: str = ""
    links: tuple[Link, ...] = ()
    tags: tuple[str, ...] = ()
    theme: str = DEFAULT_THEME
    #: File the note was decoded from; ``None`` for notes built in memory.
    source: Optional[Path] = field(default=None, compare=False)
