"""
Tests for terminal_feed.config
"""
import pytest

from terminal_feed.config import ConfigurationError, load_settings

ENV_VARS = (
    "FINNHUB_API_KEY",
    "FINNHUB_BASE_URL",
    "FINNHUB_TIMEOUT_SECONDS",
    "QUOTE_CACHE_TTL_SECONDS",
    "COMPANY_NEWS_DAYS",
    "COMPANY_NEWS_TICKERS",
    "HTTP_HOST",
    "HTTP_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.finnhub.api_key == ""
    assert settings.finnhub.enabled is False
    assert settings.finnhub.base_url == "https://finnhub.io/api/v1"
    assert settings.cache.quote_ttl_seconds == 900
    assert settings.news.company_news_days == 3
    assert settings.news.company_news_tickers == 5
    assert settings.http_server.port == 8080
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch):
    monkeypatch.setenv("FINNHUB_API_KEY", "  abc123 ")
    monkeypatch.setenv("QUOTE_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("HTTP_PORT", "9000")
    monkeypatch.setenv("FINNHUB_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.finnhub.api_key == "abc123"
    assert settings.finnhub.enabled is True
    assert settings.finnhub.request_timeout_seconds == 2.5
    assert settings.cache.quote_ttl_seconds == 60
    assert settings.http_server.port == 9000
    assert settings.log_level == "DEBUG"


def test_blank_api_key_means_fallback_mode(monkeypatch):
    monkeypatch.setenv("FINNHUB_API_KEY", "   ")

    assert load_settings().finnhub.enabled is False


@pytest.mark.parametrize("name, value", [("HTTP_PORT", "eighty"), ("FINNHUB_TIMEOUT_SECONDS", "fast")])
def test_invalid_number_raises(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        load_settings()


@pytest.mark.parametrize("ttl", ["0", "-5"])
def test_non_positive_ttl_raises(monkeypatch, ttl):
    monkeypatch.setenv("QUOTE_CACHE_TTL_SECONDS", ttl)

    with pytest.raises(ConfigurationError, match="must be positive"):
        load_settings()


@pytest.mark.parametrize(
    "name, value",
    [
        ("COMPANY_NEWS_TICKERS", "0"),
        ("COMPANY_NEWS_TICKERS", "-1"),
        ("COMPANY_NEWS_TICKERS", "10"),
        ("COMPANY_NEWS_DAYS", "-1"),
        ("LOG_LEVEL", "verbose"),
    ],
)
def test_out_of_range_value_raises(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        load_settings()


def test_company_news_bounds_accepted(monkeypatch):
    monkeypatch.setenv("COMPANY_NEWS_TICKERS", "1")
    monkeypatch.setenv("COMPANY_NEWS_DAYS", "0")
    monkeypatch.setenv("LOG_LEVEL", " warning ")

    settings = load_settings()

    assert settings.news.company_news_tickers == 1
    assert settings.news.company_news_days == 0
    assert settings.log_level == "WARNING"
