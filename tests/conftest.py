import textwrap
from pathlib import Path

import pytest

from notesite.config import SiteConfig

ALPHA = """\
    slug: alpha
    title: A
    thesis: T
    bullets:
      - b1
    tags:
      - t1
"""


def write_note(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture()
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture()
def site_config(tmp_path: Path, content_dir: Path) -> SiteConfig:
    return SiteConfig(
        output_dir=tmp_path / "output",
        base_url="https://example.com",
        content_dir=content_dir,
    )
