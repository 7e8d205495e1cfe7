"""Serialize site URLs into a sitemap.xml document.

The output follows the sitemaps.org 0.9 protocol and embeds Google's
image extension for movies that have a thumbnail.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence
from xml.sax.saxutils import escape

from .models import Category, Movie

NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NAMESPACE = "http://www.google.com/schemas/sitemap-image/1.1"
NEWS_NAMESPACE = "http://www.google.com/schemas/sitemap-news/0.9"

# escape() only handles & < > by default
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}
# Characters XML 1.0 forbids even when escaped
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def escape_xml(text: Optional[str]) -> str:
    """Escape ``& < > " '`` so *text* is safe in element and attribute content.

    ``None`` renders as an empty string.
    """
    text = "" if text is None else str(text)
    return escape(_INVALID_XML_CHARS.sub("", text), _QUOTE_ENTITIES)


@dataclass(frozen=True)
class SitemapImage:
    loc: str
    title: str


@dataclass(frozen=True)
class SitemapEntry:
    """One ``<url>`` element. ``path`` is relative to the site root."""

    path: str
    changefreq: str
    priority: str
    image: Optional[SitemapImage] = None


STATIC_PAGES: Sequence[SitemapEntry] = (
    SitemapEntry("/page/privacy-policy", "monthly", "0.7"),
    SitemapEntry("/page/contact-us", "monthly", "0.7"),
    SitemapEntry("/page/about-us", "monthly", "0.7"),
    SitemapEntry("/page/dmca", "monthly", "0.7"),
    SitemapEntry("/page/how-to-download-movie", "monthly", "0.8"),
    SitemapEntry("/search", "weekly", "0.6"),
)


def home_entry() -> SitemapEntry:
    return SitemapEntry("/", "daily", "1.0")


def category_entry(category: Category) -> SitemapEntry:
    return SitemapEntry(f"/category/{category.id}/{category.slug}", "weekly", "0.9")


def movie_entry(movie: Movie) -> SitemapEntry:
    image = None
    if movie.thumbnail:
        image = SitemapImage(loc=movie.thumbnail, title=movie.title)
    return SitemapEntry(f"/{movie.slug}", "weekly", "0.8", image=image)


def iter_entries(
    movies: Iterable[Movie], categories: Iterable[Category]
) -> Iterable[SitemapEntry]:
    """Home page, static pages, categories, then movies, in that order."""
    yield home_entry()
    yield from STATIC_PAGES
    for category in categories:
        yield category_entry(category)
    for movie in movies:
        # No slug means no page to link to
        if movie.slug:
            yield movie_entry(movie)


def _render_entry(entry: SitemapEntry, base_url: str, lastmod: str) -> str:
    lines: List[str] = [
        "  <url>",
        f"    <loc>{escape_xml(base_url + entry.path)}</loc>",
        f"    <lastmod>{lastmod}</lastmod>",
        f"    <changefreq>{entry.changefreq}</changefreq>",
        f"    <priority>{entry.priority}</priority>",
    ]
    if entry.image is not None:
        lines += [
            "    <image:image>",
            f"      <image:loc>{escape_xml(entry.image.loc)}</image:loc>",
            f"      <image:title>{escape_xml(entry.image.title)}</image:title>",
            "    </image:image>",
        ]
    lines.append("  </url>")
    return "\n".join(lines)


def build_sitemap_xml(
    site_url: str,
    movies: Iterable[Movie],
    categories: Iterable[Category],
    today: Optional[dt.date] = None,
) -> str:
    """Render the complete sitemap document.

    Args:
        site_url: Public origin of the site; a trailing slash is ignored.
        movies: Movies in the order they should appear.
        categories: Categories in the order they should appear.
        today: Date written to every ``<lastmod>``. Defaults to the current
            date; entities' own update timestamps are deliberately not used.

    Returns:
        The sitemap as a string, starting with the XML declaration.
    """
    base_url = site_url.rstrip("/")
    lastmod = (today or dt.date.today()).isoformat()

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<urlset xmlns="{NAMESPACE}"\n'
        f'        xmlns:image="{IMAGE_NAMESPACE}"\n'
        f'        xmlns:news="{NEWS_NAMESPACE}">',
    ]
    parts.extend(
        _render_entry(entry, base_url, lastmod)
        for entry in iter_entries(movies, categories)
    )
    parts.append("</urlset>")
    return "\n".join(parts) + "\n"
