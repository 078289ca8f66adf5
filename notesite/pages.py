from __future__ import annotations

import datetime as dt
import html
import logging
from dataclasses import dataclass
from pathlib import Path

import markdown

from .errors import TemplateError
from .models import Note
from .render import Templates, render_template, write_text
from .utils import join_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
DATE_FMT = "%Y-%m-%d"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SitemapEntry:
    location: str
    lastmod: dt.date
    changefreq: str
    priority: str


def render_markdown(text: str) -> str:
    md = markdown.Markdown(
        extensions=["fenced_code", "codehilite", "tables"],
        extension_configs={"codehilite": {"guess_lang": False}},
    )
    return md.convert(text)


def build_footer(templates: Templates, site_name: str, site_description: str) -> str:
    return render_template(
        templates.footer,
        template_name="footer.html",
        site_name=html.escape(site_name),
        site_description=html.escape(site_description),
    )


def build_tag_chips(tags: tuple[str, ...]) -> str:
    return " ".join(f'<span class="chip">{html.escape(tag)}</span>' for tag in tags)


def build_note_list(notes: list[Note]) -> str:
    items = []
    for note in notes:
        url = f"/{note.slug}/"
        items.append(
            f'<li class="note-card theme-{html.escape(note.theme)}">'
            f'<h2 class="note-title"><a href="{html.escape(url)}">{html.escape(note.title)}</a></h2>'
            f'<p class="note-thesis">{html.escape(note.thesis)}</p>'
            f'<div class="note-tags">{build_tag_chips(note.tags)}</div>'
            "</li>"
        )
    return "\n".join(items) if items else '<li class="empty">No notes yet.</li>'


def build_index(
    templates: Templates, output_dir: Path, notes: list[Note], site_name: str, site_description: str
) -> None:
    html_doc = render_template(
        templates.index,
        template_name="index.html",
        site_name=html.escape(site_name),
        site_description=html.escape(site_description),
        note_count=str(len(notes)),
        note_list=build_note_list(notes),
        footer=build_footer(templates, site_name, site_description),
    )
    write_text(output_dir / "index.html", html_doc)


def build_note_body(note: Note) -> dict[str, str]:
    quote = f'<blockquote class="note-quote">{html.escape(note.quote)}</blockquote>' if note.quote else ""
    bullets = "".join(f"<li>{html.escape(bullet)}</li>" for bullet in note.bullets)
    example = ""
    if note.example:
        example = (
            '<section class="note-example"><h2>Example</h2>'
            f"{render_markdown(note.example)}"
            "</section>"
        )
    diagram = ""
    if note.diagram:
        diagram = (
            '<section class="note-diagram"><h2>Diagram</h2>'
            f"<pre>{html.escape(note.diagram)}</pre>"
            "</section>"
        )
    links = ""
    if note.links:
        items = "".join(
            f'<li><a href="{html.escape(link.url)}" rel="noopener">{html.escape(link.label)}</a></li>'
            for link in note.links
        )
        links = f'<section class="note-links"><h2>Links</h2><ul>{items}</ul></section>'
    return {
        "slug": html.escape(note.slug),
        "title": html.escape(note.title),
        "thesis": html.escape(note.thesis),
        "theme": html.escape(note.theme),
        "quote": quote,
        "bullets": f'<ul class="note-bullets">{bullets}</ul>',
        "example": example,
        "diagram": diagram,
        "links": links,
        "tags": build_tag_chips(note.tags),
    }


def build_note_pages(
    templates: Templates, output_dir: Path, notes: list[Note], site_name: str, site_description: str
) -> None:
    footer = build_footer(templates, site_name, site_description)
    for note in notes:
        try:
            html_doc = render_template(
                templates.note,
                template_name="note.html",
                site_name=html.escape(site_name),
                site_description=html.escape(site_description),
                footer=footer,
                **build_note_body(note),
            )
        except TemplateError as exc:
            raise exc.for_slug(note.slug) from exc
        write_text(output_dir / f"{note.slug}.html", html_doc)
        write_text(output_dir / note.slug / "index.html", html_doc)
        logger.debug("rendered %s", note.slug)


def sitemap_entries(notes: list[Note], base_url: str, lastmod: dt.date) -> list[SitemapEntry]:
    base_url = base_url.rstrip("/")
    entries = [SitemapEntry(base_url + "/", lastmod, "weekly", "1.0")]
    for note in notes:
        entries.append(SitemapEntry(join_url(base_url, note.slug) + "/", lastmod, "monthly", "0.8"))
    return entries


def render_sitemap(entries: list[SitemapEntry]) -> str:
    items = []
    for entry in entries:
        items.append(
            "\n".join(
                [
                    "  <url>",
                    f"    <loc>{html.escape(entry.location, quote=False)}</loc>",
                    f"    <lastmod>{entry.lastmod.strftime(DATE_FMT)}</lastmod>",
                    f"    <changefreq>{entry.changefreq}</changefreq>",
                    f"    <priority>{entry.priority}</priority>",
                    "  </url>",
                ]
            )
        )
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}">',
            *items,
            "</urlset>",
            "",
        ]
    )


def build_sitemap(output_dir: Path, notes: list[Note], base_url: str, lastmod: dt.date) -> int:
    entries = sitemap_entries(notes, base_url, lastmod)
    write_text(output_dir / "sitemap.xml", render_sitemap(entries))
    return len(entries)
