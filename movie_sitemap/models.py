"""Data transfer shapes returned by the movie API.

Every response from the backend is wrapped in the same envelope::

    {"success": true, "data": ..., "error": null, "pagination": {...}}

The wire format uses camelCase keys; the dataclasses here expose them as
snake_case attributes. Unknown keys are ignored so the backend can add
fields without breaking the client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Mapping, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Decoding problems that make a single record unusable
_RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def _require_slug(raw: Mapping[str, Any]) -> str:
    slug = raw.get("slug")
    if not slug:
        raise ValueError(f"record {raw.get('id')!r} has no slug")
    return slug


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    slug: str
    created_at: str = ""
    updated_at: str = ""
    description: Optional[str] = None
    movie_count: Any = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Category":
        count = raw.get("_count") or {}
        return cls(
            id=raw["id"],
            name=raw.get("name") or "",
            slug=_require_slug(raw),
            created_at=raw.get("createdAt", ""),
            updated_at=raw.get("updatedAt", ""),
            description=raw.get("description"),
            movie_count=count.get("movies"),
        )


@dataclass(frozen=True)
class Movie:
    id: int
    title: str
    slug: str
    created_at: str = ""
    updated_at: str = ""
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    genre: Optional[str] = None
    languages: Optional[str] = None
    duration: Optional[str] = None
    release_year: Any = None
    cast: Optional[str] = None
    sizes: Optional[str] = None
    download_url: Optional[str] = None
    screenshot: Optional[str] = None
    keywords: Optional[str] = None
    category_id: Any = None
    category: Optional[Category] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Movie":
        return cls(
            id=raw["id"],
            title=raw.get("title") or "",
            slug=_require_slug(raw),
            created_at=raw.get("createdAt", ""),
            updated_at=raw.get("updatedAt", ""),
            description=raw.get("description"),
            thumbnail=raw.get("thumbnail"),
            genre=raw.get("genre"),
            languages=raw.get("languages"),
            duration=raw.get("duration"),
            release_year=raw.get("releaseYear"),
            cast=raw.get("cast"),
            sizes=raw.get("sizes"),
            download_url=raw.get("downloadUrl"),
            screenshot=raw.get("screenshot"),
            keywords=raw.get("keywords"),
            category_id=raw.get("categoryId"),
            category=_nested_category(raw.get("category")),
        )


def _nested_category(raw: Any) -> Optional[Category]:
    if not raw:
        return None
    try:
        return Category.from_dict(raw)
    except _RECORD_ERRORS as exc:
        logger.warning("Ignoring malformed nested category: %r", exc)
        return None


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: Any
    total_pages: Any
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Pagination":
        return cls(
            page=raw.get("page", 1),
            limit=raw.get("limit", 0),
            total=raw.get("total", 0),
            total_pages=raw.get("totalPages", 0),
            has_next_page=bool(raw.get("hasNextPage", False)),
            has_prev_page=bool(raw.get("hasPrevPage", False)),
        )


def _decode_records(raw: Any, decode: Callable[[Any], T], kind: str) -> List[T]:
    """Decode each record, skipping (and logging) the ones that cannot be used."""
    records: List[T] = []
    for item in raw or []:
        try:
            records.append(decode(item))
        except _RECORD_ERRORS as exc:
            logger.warning("Skipping malformed %s record: %r", kind, exc)
    return records


def _movies(raw: Any) -> List[Movie]:
    return _decode_records(raw, Movie.from_dict, "movie")


def _pagination(raw: Any) -> Optional[Pagination]:
    return Pagination.from_dict(raw) if raw else None


@dataclass(frozen=True)
class HomePageData:
    trending_movies: List[Movie]
    recent_movies: List[Movie]
    categories: List[Category]
    pagination: Optional[Pagination] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "HomePageData":
        return cls(
            trending_movies=_movies(raw.get("trendingMovies")),
            recent_movies=_movies(raw.get("recentMovies")),
            categories=category_list(raw.get("categories")),
            pagination=_pagination(raw.get("pagination")),
        )


@dataclass(frozen=True)
class MovieDetail:
    movie: Movie
    related_movies: List[Movie]
    download_redirect_url: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "MovieDetail":
        return cls(
            movie=Movie.from_dict(raw["movie"]),
            related_movies=_movies(raw.get("relatedMovies")),
            download_redirect_url=raw.get("downloadRedirectUrl"),
        )


@dataclass(frozen=True)
class CategoryPage:
    category: Category
    movies: List[Movie]
    pagination: Optional[Pagination] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CategoryPage":
        return cls(
            category=Category.from_dict(raw["category"]),
            movies=_movies(raw.get("movies")),
            pagination=_pagination(raw.get("pagination")),
        )


@dataclass(frozen=True)
class SearchResults:
    query: str
    movies: List[Movie]
    pagination: Optional[Pagination] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SearchResults":
        return cls(
            query=raw.get("query", ""),
            movies=_movies(raw.get("movies")),
            pagination=_pagination(raw.get("pagination")),
        )


@dataclass(frozen=True)
class StaticPage:
    id: int
    title: str
    slug: str
    content: str
    is_published: bool = True
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "StaticPage":
        return cls(
            id=raw["id"],
            title=raw["title"],
            slug=raw["slug"],
            content=raw.get("content", ""),
            is_published=bool(raw.get("isPublished", True)),
            meta_title=raw.get("metaTitle"),
            meta_description=raw.get("metaDescription"),
            meta_keywords=raw.get("metaKeywords"),
            created_at=raw.get("createdAt", ""),
            updated_at=raw.get("updatedAt", ""),
        )


@dataclass(frozen=True)
class PublicSettings:
    """Site-wide flags exposed to the front-end (analytics, social links)."""

    download_redirect_url: Optional[str] = None
    google_tag_manager_head: Optional[str] = None
    google_tag_manager_body: Optional[str] = None
    google_analytics: Optional[str] = None
    google_search_console: Optional[str] = None
    adsense_code: Optional[str] = None
    adstera_code: Optional[str] = None
    site_url: Optional[str] = None
    site_name: Optional[str] = None
    telegram_link: Optional[str] = None
    facebook_link: Optional[str] = None
    twitter_link: Optional[str] = None
    instagram_link: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PublicSettings":
        return cls(
            download_redirect_url=raw.get("downloadRedirectUrl"),
            google_tag_manager_head=raw.get("googleTagManagerHead"),
            google_tag_manager_body=raw.get("googleTagManagerBody"),
            google_analytics=raw.get("googleAnalytics"),
            google_search_console=raw.get("googleSearchConsole"),
            adsense_code=raw.get("adsenseCode"),
            adstera_code=raw.get("adsteraCode"),
            site_url=raw.get("siteUrl"),
            site_name=raw.get("siteName"),
            telegram_link=raw.get("telegramLink"),
            facebook_link=raw.get("facebookLink"),
            twitter_link=raw.get("twitterLink"),
            instagram_link=raw.get("instagramLink"),
        )


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """Uniform ``{success, data, error, pagination}`` response wrapper."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    pagination: Optional[Pagination] = None

    @property
    def has_next_page(self) -> bool:
        # total / totalPages are advisory; only hasNextPage continues paging
        return self.pagination is not None and self.pagination.has_next_page

    @classmethod
    def failure(cls, error: str) -> "Envelope[T]":
        return cls(success=False, error=error)

    @classmethod
    def from_dict(
        cls, raw: Mapping[str, Any], parse_data: Callable[[Any], T]
    ) -> "Envelope[T]":
        """Build an envelope, parsing ``data`` only for successful responses."""
        success = bool(raw.get("success", False))
        data = raw.get("data")
        return cls(
            success=success,
            data=parse_data(data) if success and data is not None else None,
            error=raw.get("error"),
            pagination=_pagination(raw.get("pagination")),
        )


def movie_list(raw: Any) -> List[Movie]:
    return _movies(raw)


def category_list(raw: Any) -> List[Category]:
    return _decode_records(raw, Category.from_dict, "category")

