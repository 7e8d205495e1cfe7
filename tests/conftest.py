import json

import pytest
import requests

from movie_sitemap.client import MovieApiClient
from movie_sitemap.config import ClientConfig
from movie_sitemap.models import Envelope, Movie, Pagination

API_URL = "http://api.test/api"


# Helper class for mocking requests responses
class MockResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.text = text if text is not None else json.dumps(payload)
        self.status_code = status_code
        self.ok = 200 <= status_code < 300

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for ``requests.Session``; routes by URL path and records calls."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, **kwargs):
        self.calls.append({"url": url, "params": params, **kwargs})
        path = url[len(API_URL):]
        if path not in self.routes:
            print(f"WARN: Unexpected URL requested in test: {url}")
            return MockResponse({"success": False, "error": "Not found"}, 404)
        route = self.routes[path]
        if callable(route):
            route = route(params or {})
        if isinstance(route, Exception):
            raise route
        return route


def _movie_payload(movie_id, **overrides):
    payload = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "slug": f"movie-{movie_id}",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-02T00:00:00.000Z",
    }
    payload.update(overrides)
    return payload


def _category_payload(category_id, slug="action", name="Action", count=None):
    payload = {
        "id": category_id,
        "name": name,
        "slug": slug,
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
    }
    if count is not None:
        payload["_count"] = {"movies": count}
    return payload


@pytest.fixture
def mock_response():
    return MockResponse


@pytest.fixture
def movie_payload():
    return _movie_payload


@pytest.fixture
def category_payload():
    return _category_payload


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def api_client(fake_session):
    return MovieApiClient(ClientConfig(base_url=API_URL, timeout=5), session=fake_session)


@pytest.fixture
def patch_requests(monkeypatch):
    """Makes ``requests.Session.get`` raise so unexpected real calls fail loudly."""

    def fail_get(self, url, **kwargs):
        raise requests.exceptions.ConnectionError(f"Network disabled in tests: {url}")

    monkeypatch.setattr(requests.Session, "get", fail_get)


class PagedCatalog:
    """In-memory ``fetch_page(page, limit)`` over *total* movies.

    ``fail_on_page`` makes that page return ``success=False``.
    """

    def __init__(self, total, fail_on_page=None):
        self.movies = [
            Movie(id=i, title=f"Movie {i}", slug=f"movie-{i}") for i in range(1, total + 1)
        ]
        self.fail_on_page = fail_on_page
        self.requests = []

    def __call__(self, page, limit):
        self.requests.append((page, limit))
        if page == self.fail_on_page:
            return Envelope.failure("Internal Server Error")
        start = (page - 1) * limit
        chunk = self.movies[start : start + limit]
        total_pages = -(-len(self.movies) // limit)
        return Envelope(
            success=True,
            data=chunk,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=len(self.movies),
                total_pages=total_pages,
                has_next_page=page < total_pages,
                has_prev_page=page > 1,
            ),
        )


@pytest.fixture
def paged_catalog():
    return PagedCatalog
