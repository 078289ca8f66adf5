from __future__ import annotations

from pathlib import Path
from typing import Optional


class BuildError(Exception):
    """Base class for every fatal error raised while building the site."""


class ConfigError(BuildError):
    pass


class DecodeError(BuildError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"parsing {path}: {reason}")
        self.path = path
        self.reason = reason


class OutputError(BuildError):
    def __init__(self, operation: str, path: Path, reason: str) -> None:
        super().__init__(f"{operation} {path}: {reason}")
        self.operation = operation
        self.path = path
        self.reason = reason


class TemplateError(BuildError):
    def __init__(self, template: str, reason: str, slug: Optional[str] = None) -> None:
        message = f"template {template}: {reason}"
        if slug:
            message = f"generating note page for {slug}: {message}"
        super().__init__(message)
        self.template = template
        self.reason = reason
        self.slug = slug

    def for_slug(self, slug: str) -> "TemplateError":
        return TemplateError(self.template, self.reason, slug=slug)


class DuplicateSlugError(BuildError):
    def __init__(self, slugs: list[str]) -> None:
        super().__init__("duplicate slugs: " + ", ".join(slugs))
        self.slugs = slugs
