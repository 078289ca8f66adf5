from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .config import (
    DEFAULT_STATIC_DIR,
    DEFAULT_TEMPLATES_DIR,
    SiteConfig,
    load_config,
    require_base_url,
    resolve_base_url,
)
from .content import find_duplicate_slugs, load_notes, sort_notes
from .errors import BuildError, DuplicateSlugError
from .models import Note
from .pages import build_index, build_note_pages, build_sitemap
from .render import copy_static, load_templates
from .utils import prepare_output_dir
from .validate import ValidationIssue, validate

COMMANDS = {"build", "check"}
VALUE_OPTIONS = {
    "--config",
    "--content",
    "--templates",
    "--static",
    "--output",
    "--base-url",
    "--site-name",
    "--site-description",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildSummary:
    output_dir: Path
    note_pages: int
    static_files: int
    sitemap_urls: int


def generate(notes: list[Note], config: SiteConfig, today: Optional[dt.date] = None) -> BuildSummary:
    base_url = require_base_url(config)
    duplicates = find_duplicate_slugs(notes)
    if duplicates:
        raise DuplicateSlugError(duplicates)
    notes = sort_notes(notes)
    lastmod = today or dt.date.today()
    templates = load_templates(config.templates_dir)

    output_dir = config.output_dir
    prepare_output_dir(output_dir, protected=[config.content_dir, config.templates_dir, config.static_dir])

    build_index(templates, output_dir, notes, config.site_name, config.site_description)
    build_note_pages(templates, output_dir, notes, config.site_name, config.site_description)
    static_files = copy_static(config.static_dir, output_dir)
    sitemap_urls = build_sitemap(output_dir, notes, base_url, lastmod)
    logger.debug("sitemap lists %d urls dated %s", sitemap_urls, lastmod.isoformat())
    return BuildSummary(
        output_dir=output_dir,
        note_pages=len(notes),
        static_files=static_files,
        sitemap_urls=sitemap_urls,
    )


def build_site(config: SiteConfig, today: Optional[dt.date] = None) -> BuildSummary:
    require_base_url(config)
    notes = load_notes(config.content_dir)
    logger.debug("loaded %d notes from %s", len(notes), config.content_dir)
    return generate(notes, config, today=today)


def check_content(content_dir: Path) -> list[ValidationIssue]:
    return validate(load_notes(content_dir))


def config_from_args(args: argparse.Namespace, config: dict) -> SiteConfig:
    return SiteConfig(
        output_dir=Path(args.output),
        base_url=resolve_base_url(args.base_url, config),
        content_dir=Path(args.content),
        templates_dir=Path(args.templates),
        static_dir=Path(args.static),
        site_name=args.site_name,
        site_description=args.site_description,
    )


def run_build(args: argparse.Namespace, config: dict) -> None:
    start = time.perf_counter()
    summary = build_site(config_from_args(args, config))
    elapsed = time.perf_counter() - start
    print(f"✓ Generated {summary.note_pages} note pages")
    print("✓ Generated index page")
    print(f"✓ Copied {summary.static_files} static files")
    print(f"✓ Generated sitemap.xml ({summary.sitemap_urls} urls)")
    print(f"\nBuild completed in {elapsed:.2f}s.")
    print(f"Site generated in: {summary.output_dir}")


def run_check(args: argparse.Namespace, config: dict) -> None:
    content_dir = Path(args.content)
    issues = check_content(content_dir)
    for issue in issues:
        print(issue, file=sys.stderr)
    if issues:
        print(f"Found {len(issues)} problems in {content_dir}.", file=sys.stderr)
        sys.exit(1)
    print(f"✓ All notes in {content_dir} are valid")


def build_parser(config: dict, config_path: str) -> argparse.ArgumentParser:
    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=config_path, help="Path to site config file (TOML/YAML/JSON).")
    common.add_argument(
        "--content", default=cfg_str("content", "content"), help="Directory containing YAML note records."
    )
    common.add_argument("-v", "--verbose", action="store_true", help="Log each build step.")

    parser = argparse.ArgumentParser(prog="notesite", description="Static site generator for YAML notes.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", parents=[common], help="Generate the site (default).")
    p_build.add_argument(
        "--templates",
        default=cfg_str("templates", str(DEFAULT_TEMPLATES_DIR)),
        help="Directory containing index.html, note.html and footer.html.",
    )
    p_build.add_argument(
        "--static", default=cfg_str("static", str(DEFAULT_STATIC_DIR)), help="Directory containing static assets."
    )
    p_build.add_argument("--output", default=cfg_str("output", "output"), help="Output directory for the site.")
    p_build.add_argument(
        "--base-url",
        default=None,
        help="Public site URL used for the sitemap (falls back to $BASEURL, then base_url in the config).",
    )
    p_build.add_argument("--site-name", default=cfg_str("site_name", SiteConfig.site_name), help="Site title.")
    p_build.add_argument(
        "--site-description",
        default=cfg_str("site_description", SiteConfig.site_description),
        help="Site description.",
    )
    p_build.set_defaults(func=run_build)

    p_check = sub.add_parser("check", parents=[common], help="Validate note records without building.")
    p_check.set_defaults(func=run_check)
    return parser


def command_first(argv: list[str]) -> list[str]:
    for index, arg in enumerate(argv):
        if arg in COMMANDS and (index == 0 or argv[index - 1] not in VALUE_OPTIONS):
            return [arg, *argv[:index], *argv[index + 1 :]]
    if argv and argv[0] in {"-h", "--help"}:
        return argv
    return ["build", *argv]


def main(argv: Optional[Sequence[str]] = None) -> None:
    argv = command_first(list(argv) if argv is not None else sys.argv[1:])

    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config", default="notesite.toml")
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
        args = build_parser(config, pre_args.config).parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        args.func(args, config)
    except BuildError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
