"""
FastAPI application serving the generated sitemap.
"""

from fastapi import Depends, FastAPI, Response

from movie_sitemap.aggregator import SitemapAggregator
from movie_sitemap.client import MovieApiClient
from movie_sitemap.config import ClientConfig, SitemapConfig

SITEMAP_MEDIA_TYPE = "application/xml; charset=utf-8"
SITEMAP_CACHE_CONTROL = "public, max-age=3600"

app = FastAPI(
    title="Movie Sitemap",
    description="sitemap.xml for the movie listing site",
    version="1.0.0",
)


def get_client() -> MovieApiClient:
    """API client for FastAPI Depends(); configured from the environment."""
    return MovieApiClient(ClientConfig.from_env())


def get_sitemap_config() -> SitemapConfig:
    return SitemapConfig.from_env()


@app.get("/sitemap.xml")
def sitemap(
    client: MovieApiClient = Depends(get_client),
    config: SitemapConfig = Depends(get_sitemap_config),
):
    """Full sitemap; data failures yield a smaller but valid document."""
    xml = SitemapAggregator(client, config).generate()
    return Response(
        content=xml,
        media_type=SITEMAP_MEDIA_TYPE,
        headers={"Cache-Control": SITEMAP_CACHE_CONTROL},
    )
