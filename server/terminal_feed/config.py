"""
Terminal Feed Configuration

Centralized configuration for the terminal feed service.
All environment variables MUST be defined here. No os.getenv() calls allowed elsewhere.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field

# Upper bound on company news queries per request
MAX_COMPANY_NEWS_TICKERS = 5

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _optional_env(name: str, default: str = "") -> str:
    """Get an optional environment variable with a default."""
    return os.environ.get(name, default)


def _optional_env_int(name: str, default: int) -> int:
    """Get an optional integer environment variable with a default."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid integer value for {name}: {value}")


def _optional_env_float(name: str, default: float) -> float:
    """Get an optional float environment variable with a default."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid float value for {name}: {value}")


@dataclass(frozen=True)
class FinnhubConfig:
    """Finnhub REST API configuration."""
    api_key: str
    base_url: str = "https://finnhub.io/api/v1"
    request_timeout_seconds: float = 10.0

    @property
    def enabled(self) -> bool:
        """Live data is only attempted when a credential is configured."""
        return bool(self.api_key)


@dataclass(frozen=True)
class CacheConfig:
    """Quote cache configuration."""
    quote_ttl_seconds: int = 15 * 60


@dataclass(frozen=True)
class NewsConfig:
    """News aggregation configuration."""
    company_news_days: int = 3
    company_news_tickers: int = MAX_COMPANY_NEWS_TICKERS


@dataclass(frozen=True)
class HttpServerConfig:
    """HTTP server configuration for the terminal client."""
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class Settings:
    """Root configuration container."""
    finnhub: FinnhubConfig
    cache: CacheConfig = field(default_factory=CacheConfig)
    news: NewsConfig = field(default_factory=NewsConfig)
    http_server: HttpServerConfig = field(default_factory=HttpServerConfig)
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load all settings from environment variables.

    FINNHUB_API_KEY is optional: without it both aggregators serve their
    static fallback payloads, which is a supported mode rather than an error.
    """
    finnhub = FinnhubConfig(
        api_key=_optional_env("FINNHUB_API_KEY", "").strip(),
        base_url=_optional_env("FINNHUB_BASE_URL", "https://finnhub.io/api/v1"),
        request_timeout_seconds=_optional_env_float("FINNHUB_TIMEOUT_SECONDS", 10.0),
    )

    cache = CacheConfig(
        quote_ttl_seconds=_optional_env_int("QUOTE_CACHE_TTL_SECONDS", 15 * 60),
    )
    if cache.quote_ttl_seconds <= 0:
        raise ConfigurationError(
            f"QUOTE_CACHE_TTL_SECONDS must be positive, got {cache.quote_ttl_seconds}"
        )

    news = NewsConfig(
        company_news_days=_optional_env_int("COMPANY_NEWS_DAYS", 3),
        company_news_tickers=_optional_env_int("COMPANY_NEWS_TICKERS", MAX_COMPANY_NEWS_TICKERS),
    )
    if not 1 <= news.company_news_tickers <= MAX_COMPANY_NEWS_TICKERS:
        raise ConfigurationError(
            f"COMPANY_NEWS_TICKERS must be between 1 and {MAX_COMPANY_NEWS_TICKERS}, "
            f"got {news.company_news_tickers}"
        )
    if news.company_news_days < 0:
        raise ConfigurationError(
            f"COMPANY_NEWS_DAYS must not be negative, got {news.company_news_days}"
        )

    http_server = HttpServerConfig(
        host=_optional_env("HTTP_HOST", "0.0.0.0"),
        port=_optional_env_int("HTTP_PORT", 8080),
    )

    log_level = _optional_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level}"
        )

    return Settings(
        finnhub=finnhub,
        cache=cache,
        news=news,
        http_server=http_server,
        log_level=log_level,
    )
