import pytest

from movie_sitemap.config import (
    DEFAULT_API_URL,
    DEFAULT_BATCH_SIZE,
    ClientConfig,
    SitemapConfig,
    get_api_port,
    get_log_level,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PUBLIC_API_URL",
        "PUBLIC_SITE_URL",
        "API_TIMEOUT_SECONDS",
        "SITEMAP_BATCH_SIZE",
        "LOG_LEVEL",
        "API_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of these tests
    monkeypatch.setattr("movie_sitemap.config.load_dotenv", lambda: False)


def test_defaults():
    assert ClientConfig.from_env() == ClientConfig(base_url=DEFAULT_API_URL, timeout=30.0)
    assert SitemapConfig.from_env().batch_size == DEFAULT_BATCH_SIZE
    assert get_log_level() == "INFO"
    assert get_api_port() == 4321


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("PUBLIC_API_URL", "https://api.films.test/api/")
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("PUBLIC_SITE_URL", "https://films.test/")
    monkeypatch.setenv("SITEMAP_BATCH_SIZE", "250")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    client_config = ClientConfig.from_env()
    sitemap_config = SitemapConfig.from_env()

    assert client_config.base_url == "https://api.films.test/api"
    assert client_config.timeout == 12.5
    assert sitemap_config.site_url == "https://films.test"
    assert sitemap_config.batch_size == 250
    assert get_log_level() == "DEBUG"


def test_empty_api_url_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PUBLIC_API_URL", "")

    assert ClientConfig.from_env().base_url == DEFAULT_API_URL


@pytest.mark.parametrize("batch_size", [0, -5])
def test_batch_size_must_be_positive(batch_size):
    with pytest.raises(ValueError):
        SitemapConfig(batch_size=batch_size)
