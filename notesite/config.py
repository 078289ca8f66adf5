from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

from .errors import ConfigError

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATES_DIR = PACKAGE_DIR / "templates"
DEFAULT_STATIC_DIR = PACKAGE_DIR / "static"
BASE_URL_ENV = "BASEURL"


@dataclass(frozen=True)
class SiteConfig:
    output_dir: Path
    base_url: str = ""
    content_dir: Path = Path("content")
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    static_dir: Path = DEFAULT_STATIC_DIR
    site_name: str = "Notes"
    site_description: str = "Short notes, one idea each."


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping: {path}")
    return data


def resolve_base_url(
    cli_value: Optional[str], config: Mapping[str, object], environ: Optional[Mapping[str, str]] = None
) -> str:
    if environ is None:
        environ = os.environ
    for value in (cli_value, environ.get(BASE_URL_ENV), config.get("base_url")):
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def require_base_url(config: SiteConfig) -> str:
    if not config.base_url:
        raise ConfigError(
            f"{BASE_URL_ENV} environment variable must be set (or pass --base-url, or set base_url in the config file)"
        )
    return config.base_url
