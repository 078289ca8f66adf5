from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from .errors import OutputError

logger = logging.getLogger(__name__)


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def prepare_output_dir(output_dir: Path, protected: Iterable[Path] = ()) -> None:
    output_resolved = output_dir.resolve()
    for path in [Path.cwd(), *protected]:
        resolved = path.resolve()
        if resolved == output_resolved or resolved.is_relative_to(output_resolved):
            raise OutputError("removing output directory", output_dir, f"refusing to remove {path}")
    try:
        shutil.rmtree(output_dir)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise OutputError("removing output directory", output_dir, exc.strerror or str(exc)) from exc
    else:
        logger.debug("removed previous output in %s", output_dir)
    try:
        output_dir.mkdir(parents=True)
    except OSError as exc:
        raise OutputError("creating output directory", output_dir, exc.strerror or str(exc)) from exc
