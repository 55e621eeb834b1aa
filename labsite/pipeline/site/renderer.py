"""HTML rendering for the static lab website.

This module turns loaded feed results into page HTML: navigation, the home
page, one card per record for each content type, the category tabs and
search box, and the error panel with diagnostics shown when a feed failed.
Every value taken from a sheet is escaped; free-text descriptions and
abstracts are rendered from Markdown with ``markdown2`` in escape mode.

System Boundaries
-----------------
- Accepts already loaded :class:`~labsite.pipeline.loader.LoadResult`
  objects; performs no network access.
- Page assembly fills placeholders in the bundled template with
  ``str.replace`` so CSS and script braces need no escaping.
- Only :func:`write_html_output` touches the filesystem.

Example
-------
>>> from labsite.pipeline.site import renderer
>>> renderer.clean_html_output("<p></p><h1>Hi</h1>")
'<h1>Hi</h1>'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from html import escape
from pathlib import Path
from typing import Any

import markdown2

from labsite.config import CONTENT_TYPES, HOME_SECTIONS, PAGE_BLURBS, PAGE_FILENAMES
from labsite.pipeline.content import (
    NewsItem,
    Person,
    Project,
    Publication,
    Resource,
    category_label,
    person_group,
)
from labsite.pipeline.feeds.schema import FeedSchema
from labsite.pipeline.loader import LoadResult
from labsite.pipeline.view import group_records

logger = logging.getLogger(__name__)

ACTIVE_CLASS = ' class="active"'

SEARCH_PLACEHOLDERS: dict[str, str] = {
    "people": "Search: name, role, interests...",
    "projects": "Search: title, status, tags, dates...",
    "publications": "Search: title, authors, journal, year...",
    "resources": "Search: title, description, tags, files...",
    "news": "Search: title, tags, date...",
}


def clean_html_output(html_content: str) -> str:
    r"""Normalize HTML produced by Markdown conversion.

    Removes empty paragraphs and redundant breaks and collapses whitespace
    between tags.

    Parameters
    ----------
    html_content : str
        Raw HTML string.

    Returns
    -------
    str
        Cleaned HTML string.

    Raises
    ------
    TypeError
        If input is not str.

    Examples
    --------
    >>> clean_html_output("<p></p><h1>Hi</h1><p>&nbsp;</p><br><br>")
    '<h1>Hi</h1><br>'
    """
    if not isinstance(html_content, str):
        raise TypeError("Input must be a string.")
    html_content = re.sub(r"<p>\s*</p>", "", html_content)
    html_content = re.sub(r"<p>&nbsp;</p>", "", html_content)
    html_content = re.sub(r"<p><br\s*/?>\s*</p>", "", html_content)
    html_content = re.sub(r"(<br\s*/?>\s*){2,}", "<br>", html_content)
    html_content = re.sub(r">\s+<", "><", html_content)
    return html_content.strip()


def markdown_to_html(text: str | None) -> str:
    """Render sheet Markdown to cleaned HTML; raw HTML in the sheet is escaped."""
    if not text:
        return ""
    html = markdown2.markdown(text, safe_mode="escape", extras=["tables", "fenced-code-blocks"])
    return clean_html_output(str(html))


def _attr(value: object) -> str:
    return escape(str(value), quote=True)


def _link(url: str | None, label: str) -> str:
    if not url:
        return ""
    return f'<a href="{_attr(url)}" target="_blank" rel="noreferrer">{escape(label)}</a>'


def _badges(values: Iterable[str], css: str = "badge") -> str:
    return "".join(f'<span class="{css}">{escape(v)}</span>' for v in values)


def _meta(*parts: object) -> str:
    text = " · ".join(str(p) for p in parts if p not in (None, ""))
    return f'<div class="meta">{escape(text)}</div>' if text else ""


def _card(schema: FeedSchema, record: Any, inner: str) -> str:
    search = schema.search_text(record).lower()
    categories = " ".join(schema.categories(record))
    return (
        f'<article class="card" id="{_attr(record.id)}" '
        f'data-search="{_attr(search)}" data-categories="{_attr(categories)}">'
        f"{inner}</article>"
    )


def render_nav(active: str, lab_name: str) -> str:
    """Render the navigation bar with ``active`` highlighted."""
    home_css = ACTIVE_CLASS if active == "home" else ""
    links = [
        f'<a class="brand" href="{PAGE_FILENAMES["home"]}">{escape(lab_name)}</a>',
        f'<a href="{PAGE_FILENAMES["home"]}"{home_css}>Home</a>',
    ]
    for name in CONTENT_TYPES:
        css = ACTIVE_CLASS if name == active else ""
        links.append(f'<a href="{PAGE_FILENAMES[name]}"{css}>{escape(name.title())}</a>')
    return f'<header class="nav"><div class="inner">{"".join(links)}</div></header>'


def render_home(lab_name: str, lab_description: str) -> str:
    """Render the home page body: title, description and section cards."""
    sections = "".join(
        f'<a class="card" href="{PAGE_FILENAMES[name]}"><h2>{escape(name.title())}</h2>'
        f"<p>{escape(PAGE_BLURBS[name])}</p></a>"
        for name in HOME_SECTIONS
    )
    return (
        f"<h1>{escape(lab_name)}</h1><p>{escape(lab_description)}</p>"
        f'<div class="grid">{sections}</div>'
    )


def render_person(schema: FeedSchema, p: Person) -> str:
    photo = f'<img src="{_attr(p.photo_url)}" alt="{_attr(p.name)}">' if p.photo_url else ""
    email = f'<a href="mailto:{_attr(p.email)}">{escape(p.email)}</a>' if p.email else ""
    orcid_url = p.orcid if p.orcid and p.orcid.startswith("http") else None
    inner = (
        f"{photo}<h3>{escape(p.name)}</h3>{_meta(p.role, p.affiliation)}"
        f"{_badges(p.interests)}{_badges(p.methods)}"
        f'<div class="links">{_link(p.website, "Website")}{_link(orcid_url, "ORCID")}{email}</div>'
    )
    return _card(schema, p, inner)


def render_project(schema: FeedSchema, p: Project) -> str:
    image = f'<img src="{_attr(p.image_url)}" alt="{_attr(p.title)}">' if p.image_url else ""
    period = " – ".join(d for d in (p.start_date, p.end_date) if d)
    inner = (
        f"{image}<h3>{escape(p.title)}</h3>{_meta(p.status, period)}"
        f"{markdown_to_html(p.description)}{_badges(p.tags)}"
        f'<div class="links">{_link(p.url, "Website")}{_link(p.repo, "Repository")}</div>'
    )
    return _card(schema, p, inner)


def render_publication(schema: FeedSchema, p: Publication) -> str:
    abstract = (
        f"<details><summary>Abstract</summary>{markdown_to_html(p.abstract)}</details>"
        if p.abstract
        else ""
    )
    inner = (
        f"<h3>{escape(p.title)}</h3>{_meta(p.authors, p.venue_label, p.year)}"
        f'<div class="links">{_link(p.url, "Link")}{_link(p.pdf, "PDF")}</div>'
        f"{abstract}{_badges(p.tags)}"
    )
    return _card(schema, p, inner)


def render_resource(schema: FeedSchema, r: Resource) -> str:
    files = "".join(_link(f.url, f.name) for f in r.files)
    inner = (
        f"<h3>{escape(r.title)}</h3>{_meta(r.created_at)}"
        f"{_badges((category_label(c) for c in r.categories), 'badge category')}"
        f"{markdown_to_html(r.description)}{_badges(r.tags)}"
        f'<div class="links">{files}</div>'
    )
    return _card(schema, r, inner)


def render_news_item(schema: FeedSchema, n: NewsItem) -> str:
    image = f'<img src="{_attr(n.image_url)}" alt="{_attr(n.title)}">' if n.image_url else ""
    inner = (
        f"{image}<h3>{escape(n.title)}</h3>{_meta(n.date)}"
        f"{markdown_to_html(n.summary)}{_badges(n.tags)}"
        f'<div class="links">{_link(n.url, "Read more")}</div>'
    )
    return _card(schema, n, inner)


CARD_RENDERERS: dict[str, Callable[[FeedSchema, Any], str]] = {
    "people": render_person,
    "projects": render_project,
    "publications": render_publication,
    "resources": render_resource,
    "news": render_news_item,
}


def render_error_panel(result: LoadResult) -> str:
    """Render the error message and diagnostics of a failed load."""
    rows = "".join(
        f"<tr><td>{escape(label)}</td><td><code>{escape(value)}</code></td></tr>"
        for label, value in result.diagnostics.as_rows()
    )
    return (
        f'<div class="error" role="alert"><strong>Could not load this page.</strong>'
        f"<p>{escape(result.error or '')}</p>"
        f"<details open><summary>Diagnostics</summary><table>{rows}</table></details></div>"
    )


def render_toolbar(schema: FeedSchema, counts: dict[str, int]) -> str:
    """Render the search box and, when the schema has categories, the tabs."""
    search = (
        f'<input id="search" type="search" '
        f'placeholder="{_attr(SEARCH_PLACEHOLDERS.get(schema.name, "Search..."))}">'
    )
    tabs = ""
    if len(schema.tabs) > 1:
        buttons = "".join(
            f'<button type="button" data-tab="{_attr(tab.key)}" '
            f'data-match="{_attr(" ".join(sorted(tab.match)) if tab.match else "")}"'
            f'{ACTIVE_CLASS if i == 0 else ""}>'
            f"{escape(tab.label)} ({counts.get(tab.key, 0)})</button>"
            for i, tab in enumerate(schema.tabs)
        )
        tabs = f'<div class="tabs">{buttons}</div>'
    return f'<div class="toolbar">{search}{tabs}</div>'


def render_feed_body(schema: FeedSchema, result: LoadResult, counts: dict[str, int]) -> str:
    """Render the body of a content page for a load result.

    Failed loads render the error panel, empty record sets render
    ``No results.``, and people are grouped by status.
    """
    heading = f"<h1>{escape(schema.label)}</h1>"
    if not result.ok:
        return heading + render_error_panel(result)
    if not result.records:
        return heading + '<p class="empty">No results.</p>'
    render = CARD_RENDERERS[schema.name]
    empty = '<p class="empty" id="no-results" hidden>No results.</p>'
    if schema.name == "people":
        sections = "".join(
            f'<section class="group"><h2>{escape(group)}</h2><div class="grid">'
            + "".join(render(schema, p) for p in members)
            + "</div></section>"
            for group, members in group_records(result.records, person_group)
        )
        return heading + render_toolbar(schema, counts) + sections + empty
    cards = "".join(render(schema, record) for record in result.records)
    return heading + render_toolbar(schema, counts) + f'<div class="grid">{cards}</div>' + empty


def generate_page_html(
    template_path: Path,
    page_title: str,
    nav_html: str,
    body_html: str,
) -> str:
    r"""Fill the page template's placeholders.

    Parameters
    ----------
    template_path : Path
        HTML template containing ``{page_title}``, ``{nav_html}`` and
        ``{body_html}``.
    page_title, nav_html, body_html : str
        Replacement values; ``page_title`` is escaped here.

    Returns
    -------
    str
        Rendered page.

    Raises
    ------
    OSError
        If the template cannot be read.
    """
    with template_path.open("r", encoding="utf-8") as fh:
        tpl = fh.read()
    return (
        tpl.replace("{page_title}", escape(page_title))
        .replace("{nav_html}", nav_html)
        .replace("{body_html}", body_html)
    )


def write_html_output(html_content: str, output_file: Path) -> bool:
    """Write HTML to disk, creating parent directories.

    Returns
    -------
    bool
        ``True`` on success, ``False`` if writing failed (the error is
        logged).
    """
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(html_content, encoding="utf-8")
    except OSError:
        logger.exception("Failed to write HTML output to %s", output_file)
        return False
    return True


__all__ = [
    "CARD_RENDERERS",
    "clean_html_output",
    "generate_page_html",
    "markdown_to_html",
    "render_error_panel",
    "render_feed_body",
    "render_home",
    "render_nav",
    "render_toolbar",
    "write_html_output",
]
