from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from .errors import OutputError, TemplateError

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")
TEMPLATE_NAMES = ("index.html", "note.html", "footer.html")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Templates:
    index: str
    note: str
    footer: str


def render_template(template: str, template_name: str = "<template>", **context: str) -> str:
    def repl(match: re.Match) -> str:
        key = match.group(1)
        if key not in context:
            raise TemplateError(template_name, f"no value for placeholder {{{{{key}}}}}")
        return context[key]

    return PLACEHOLDER_RE.sub(repl, template)


def read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TemplateError(path.name, f"not found in {path.parent}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(path.name, str(exc)) from exc


def load_templates(templates_dir: Path) -> Templates:
    index, note, footer = (read_template(templates_dir / name) for name in TEMPLATE_NAMES)
    return Templates(index=index, note=note, footer=footer)


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError("writing", path, exc.strerror or str(exc)) from exc


def copy_static(static_dir: Path, output_dir: Path) -> int:
    if not static_dir.exists():
        logger.debug("no static directory at %s", static_dir)
        return 0
    try:
        items = sorted(static_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise OutputError("reading static directory", static_dir, exc.strerror or str(exc)) from exc
    copied = 0
    for item in items:
        if item.is_dir():
            continue
        dest = output_dir / item.name
        try:
            shutil.copyfile(item, dest)
        except OSError as exc:
            raise OutputError("copying static file", item, exc.strerror or str(exc)) from exc
        copied += 1
    return copied
