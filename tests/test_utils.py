"""Unit tests for notesite.utils."""

from pathlib import Path

import pytest

from notesite.errors import OutputError
from notesite.utils import join_url, prepare_output_dir


def test_join_url():
    assert join_url("https://example.com/", "/alpha") == "https://example.com/alpha"
    assert join_url("https://example.com", "") == "https://example.com"


class TestPrepareOutputDir:
    def test_creates_missing(self, tmp_path: Path):
        out = tmp_path / "a" / "out"
        prepare_output_dir(out)
        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_clears_existing(self, tmp_path: Path):
        out = tmp_path / "out"
        (out / "stale").mkdir(parents=True)
        (out / "stale" / "old.html").write_text("old", encoding="utf-8")
        (out / "keep.txt").write_text("x", encoding="utf-8")
        prepare_output_dir(out)
        assert list(out.iterdir()) == []

    def test_refuses_input_directory(self, tmp_path: Path):
        content = tmp_path / "site" / "content"
        content.mkdir(parents=True)
        with pytest.raises(OutputError, match="refusing"):
            prepare_output_dir(tmp_path / "site", protected=[content])
        assert content.is_dir()

    def test_refuses_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(OutputError):
            prepare_output_dir(tmp_path)

    def test_file_in_the_way(self, tmp_path: Path):
        out = tmp_path / "out"
        out.write_text("not a directory", encoding="utf-8")
        with pytest.raises(OutputError):
            prepare_output_dir(out)
