"""HTTP client for the movie-listing REST API.

Each public method maps one logical query to exactly one ``GET`` request and
returns an :class:`~movie_sitemap.models.Envelope`. Transport problems never
escape as exceptions: a network error, a non-2xx status, a body that is not
JSON or a payload of the wrong shape all come back as
``Envelope(success=False, error=...)`` so every caller handles a single
result type.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar
from urllib.parse import quote

import requests

from .config import ClientConfig
from .models import (
    Category,
    CategoryPage,
    Envelope,
    HomePageData,
    Movie,
    MovieDetail,
    PublicSettings,
    SearchResults,
    StaticPage,
    category_list,
    movie_list,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_USER_AGENT = "movie-sitemap (+https://www.sitemaps.org/)"


class ApiClientError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body_snippet: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class MovieApiClient:
    """Typed wrapper around the movie API.

    The client is stateless apart from its ``requests.Session``; it does not
    cache and does not retry.

    >>> client = MovieApiClient(ClientConfig(base_url="http://localhost:8080/api"))
    >>> envelope = client.get_movies(page=2, limit=50)
    >>> movies = envelope.data if envelope.success else []
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ):
        self.config = config if config is not None else ClientConfig()
        self.session = session if session is not None else requests.Session()
        self._headers = {"Accept": "application/json", "User-Agent": _USER_AGENT}

    # --- Transport ---
    def _request_json(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Mapping[str, Any]:
        url = f"{self.config.base_url}{path}"
        try:
            resp = self.session.get(
                url, params=params, headers=self._headers, timeout=self.config.timeout
            )
        except requests.RequestException as exc:
            raise ApiClientError(f"Request to {url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise ApiClientError(
                f"API returned {resp.status_code} for {path}",
                status_code=resp.status_code,
                body_snippet=(resp.text or "")[:400],
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ApiClientError(
                f"API returned non-JSON response for {path}",
                status_code=resp.status_code,
                body_snippet=(resp.text or "")[:400],
            ) from exc

        if not isinstance(payload, dict):
            raise ApiClientError(f"API returned unexpected JSON shape for {path}")
        logger.debug("GET %s -> %s", url, resp.status_code)
        return payload

    def _get(
        self,
        path: str,
        parse_data: Callable[[Any], T],
        params: Optional[Mapping[str, Any]] = None,
    ) -> Envelope[T]:
        try:
            payload = self._request_json(path, params)
            try:
                return Envelope.from_dict(payload, parse_data)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise ApiClientError(
                    f"API returned malformed data for {path}: {exc!r}"
                ) from exc
        except ApiClientError as exc:
            logger.error("Error fetching %s: %s", path, exc)
            return Envelope.failure(str(exc))

    # --- Endpoints ---
    def get_home_page_data(self, page: int = 1) -> Envelope[HomePageData]:
        """Trending + recent movies and categories for the home page."""
        return self._get("/home", HomePageData.from_dict, {"page": page})

    def get_movies(self, page: int = 1, limit: int = 20) -> Envelope[List[Movie]]:
        return self._get("/movies", movie_list, {"page": page, "limit": limit})

    def get_trending_movies(self) -> Envelope[List[Movie]]:
        return self._get("/movies/trending", movie_list)

    def get_movie_by_slug(self, slug: str) -> Envelope[MovieDetail]:
        """Single movie with related movies and the download redirect URL."""
        return self._get(f"/movies/{_segment(slug)}", MovieDetail.from_dict)

    def get_categories(self) -> Envelope[List[Category]]:
        """All categories, each with its movie count."""
        return self._get("/categories", category_list)

    def get_category_by_slug(
        self, slug: str, page: int = 1, limit: int = 20
    ) -> Envelope[CategoryPage]:
        return self._get(
            f"/categories/{_segment(slug)}",
            CategoryPage.from_dict,
            {"page": page, "limit": limit},
        )

    def search_movies(
        self, query: str, page: int = 1, limit: int = 20
    ) -> Envelope[SearchResults]:
        """Full-text search; ``query`` is form-encoded (a space is sent as ``+``)."""
        return self._get(
            "/search", SearchResults.from_dict, {"q": query, "page": page, "limit": limit}
        )

    def get_static_page(self, slug: str) -> Envelope[StaticPage]:
        return self._get(f"/static-pages/{_segment(slug)}", StaticPage.from_dict)

    def get_public_settings(self) -> Envelope[PublicSettings]:
        return self._get("/astro-settings", PublicSettings.from_dict)


def _segment(value: str) -> str:
    """Percent-encode *value* for use as a single URL path segment."""
    return quote(str(value), safe="")
