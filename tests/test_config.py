"""Unit tests for notesite.config."""

from pathlib import Path

import pytest

from notesite.config import SiteConfig, load_config, require_base_url, resolve_base_url
from notesite.errors import ConfigError


class TestLoadConfig:
    def test_missing_file(self, tmp_path: Path):
        assert load_config(tmp_path / "notesite.toml") == {}

    def test_toml(self, tmp_path: Path):
        path = tmp_path / "notesite.toml"
        path.write_text('base_url = "https://example.com"\nsite_name = "Mine"\n', encoding="utf-8")
        assert load_config(path) == {"base_url": "https://example.com", "site_name": "Mine"}

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "site.yaml"
        path.write_text("output: public\n", encoding="utf-8")
        assert load_config(path) == {"output": "public"}

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "site.yml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == {}

    def test_json(self, tmp_path: Path):
        path = tmp_path / "site.json"
        path.write_text('{"content": "notes"}', encoding="utf-8")
        assert load_config(path) == {"content": "notes"}

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "notesite.toml"
        path.write_text("base_url = \n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path):
        path = tmp_path / "site.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)


class TestBaseUrl:
    def test_cli_wins(self):
        assert resolve_base_url("https://cli", {"base_url": "https://cfg"}, {"BASEURL": "https://env"}) == "https://cli"

    def test_env_before_config(self):
        assert resolve_base_url(None, {"base_url": "https://cfg"}, {"BASEURL": "https://env"}) == "https://env"

    def test_config_fallback(self):
        assert resolve_base_url(None, {"base_url": "https://cfg"}, {}) == "https://cfg"

    def test_blank_values_skipped(self):
        assert resolve_base_url("  ", {}, {"BASEURL": ""}) == ""

    def test_require(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="BASEURL"):
            require_base_url(SiteConfig(output_dir=tmp_path))
        assert require_base_url(SiteConfig(output_dir=tmp_path, base_url="https://x")) == "https://x"
