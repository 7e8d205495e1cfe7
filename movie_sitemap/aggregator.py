"""Collect every movie and category from the API and render the sitemap."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .client import MovieApiClient
from .config import SitemapConfig
from .models import Category, Movie
from .pagination import fetch_all_pages
from .sitemap import build_sitemap_xml

logger = logging.getLogger(__name__)


@dataclass
class SitemapData:
    movies: List[Movie] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)


class SitemapAggregator:
    """Builds a complete sitemap from a paginated movie API.

    The client is injected, so tests can pass a lightweight mock instead of
    patching ``requests``:

    >>> mock_client = Mock(get_movies=fake_pages, get_categories=fake_categories)
    >>> xml = SitemapAggregator(mock_client, SitemapConfig()).generate()

    Each call starts from empty local state; an aggregator can serve any
    number of concurrent requests.
    """

    def __init__(
        self,
        client: Optional[MovieApiClient] = None,
        config: Optional[SitemapConfig] = None,
    ):
        self.client = client if client is not None else MovieApiClient()
        self.config = config if config is not None else SitemapConfig()

    # --- Data collection ---
    def fetch_movies(self) -> List[Movie]:
        """Page through ``/movies`` until the server reports no next page."""
        try:
            return fetch_all_pages(self.client.get_movies, limit=self.config.batch_size)
        except Exception:
            logger.exception("Error fetching movies for sitemap")
            return []

    def fetch_categories(self) -> List[Category]:
        """Categories come back in one unpaginated response."""
        try:
            envelope = self.client.get_categories()
        except Exception:
            logger.exception("Error fetching categories for sitemap")
            return []
        if not envelope.success:
            logger.warning("Categories unavailable for sitemap: %s", envelope.error)
            return []
        return list(envelope.data or [])

    def collect(self) -> SitemapData:
        data = SitemapData(movies=self.fetch_movies(), categories=self.fetch_categories())
        logger.info(
            "Sitemap: fetched %d movies and %d categories",
            len(data.movies),
            len(data.categories),
        )
        return data

    # --- Output ---
    def generate(self, today: Optional[dt.date] = None) -> str:
        """Fetch everything and return the sitemap document."""
        data = self.collect()
        return build_sitemap_xml(
            self.config.site_url, data.movies, data.categories, today=today
        )
