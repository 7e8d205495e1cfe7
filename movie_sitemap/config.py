"""Configuration for the API client and the sitemap generator.

Values can be provided through a ``.env`` file placed in the project root:

```env
# .env
PUBLIC_API_URL=https://api.example.com/api
PUBLIC_SITE_URL=https://example.com
API_TIMEOUT_SECONDS=15
SITEMAP_BATCH_SIZE=500
```

The variables are loaded via *python‑dotenv* once, when a config object is
built with ``from_env()``. Everything downstream receives the resolved
dataclass instead of reading the environment itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8080/api"
DEFAULT_SITE_URL = "https://filmyfly.work"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_BATCH_SIZE = 500


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for ``MovieApiClient``."""

    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        # Paths are always joined with a leading slash
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls) -> "ClientConfig":
        load_dotenv()
        return cls(
            base_url=os.getenv("PUBLIC_API_URL") or DEFAULT_API_URL,
            timeout=float(os.getenv("API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        )


@dataclass(frozen=True)
class SitemapConfig:
    """Settings for ``SitemapAggregator``.

    Parameters
    ----------
    site_url
        Public origin of the website; every ``<loc>`` is built from it.
    batch_size
        Page size used when paging through the movie catalog. Only affects
        the number of round-trips, never the result.
    """

    site_url: str = DEFAULT_SITE_URL
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self):
        if self.batch_size <= 0:
            raise ValueError("batch_size must be a positive integer")
        object.__setattr__(self, "site_url", self.site_url.rstrip("/"))

    @classmethod
    def from_env(cls) -> "SitemapConfig":
        load_dotenv()
        return cls(
            site_url=os.getenv("PUBLIC_SITE_URL") or DEFAULT_SITE_URL,
            batch_size=int(os.getenv("SITEMAP_BATCH_SIZE", DEFAULT_BATCH_SIZE)),
        )


def get_log_level() -> str:
    """Get log level from env or default."""
    load_dotenv()
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_host() -> str:
    """Get host the sitemap server binds to."""
    load_dotenv()
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get port the sitemap server listens on."""
    load_dotenv()
    return int(os.getenv("API_PORT", "4321"))
