"""
Headline Display Helpers

Display-time refinement of headlines: ticker extraction, a coarse mood
category, and splitting a headline into plain / clickable ticker segments
that link to Google Finance.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from terminal_feed.models import NewsCategory

KNOWN_TICKERS: tuple[str, ...] = (
    "AAPL", "MSFT", "GOOGL", "GOOG", "AMZN", "NVDA", "META", "TSLA", "JPM", "V",
    "MA", "DIS", "NFLX", "ADBE", "CRM", "INTC", "AMD", "QCOM", "AVGO", "ORCL",
    "IBM", "BA", "XOM", "CVX", "GS", "MS", "BAC", "BTC", "ETH", "SOL",
    "XRP", "DOGE", "COIN", "GME", "AMC", "PLTR", "AI", "SMCI", "ARM", "WMT",
    "KO", "PEP", "MCD", "NKE", "SBUX", "HD", "LOW", "TGT", "COST",
)
_KNOWN = frozenset(KNOWN_TICKERS)

GOOGLE_FINANCE_BASE = "https://www.google.com/finance/quote"

CRYPTO_FINANCE_SYMBOLS: dict[str, str] = {
    "BTC": "BTC-USD",
    "ETH": "ETH-USD",
    "SOL": "SOL-USD",
    "XRP": "XRP-USD",
    "DOGE": "DOGE-USD",
}

INDEX_FINANCE_SYMBOLS: dict[str, str] = {
    "S&P": ".INX",
    "DOW": ".DJI",
    "NASDAQ": ".IXIC",
}

# Evaluated in order; first match decides the category
_CATEGORY_RULES: tuple[tuple[re.Pattern[str], NewsCategory], ...] = (
    (
        re.compile(r"bitcoin|btc|crypto|ethereum|eth|solana|sol|doge|xrp|coin|token|blockchain"),
        NewsCategory.CRYPTO,
    ),
    (re.compile(r"fed|rate|inflation|cpi|treasury|bond|yield"), NewsCategory.MACRO),
    (re.compile(r"rally|surge|soar|jump|gain|bull|high|record"), NewsCategory.BULLISH),
    (re.compile(r"fall|drop|crash|plunge|bear|sell|decline|loss"), NewsCategory.BEARISH),
    (re.compile(r"earnings|revenue|profit|quarter|eps"), NewsCategory.EARNINGS),
)

_NON_ALNUM = re.compile(r"[^A-Z0-9\s]")
_TICKER_WORDS = re.compile(
    r"\b(" + "|".join(re.escape(t) for t in KNOWN_TICKERS) + r")\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class HeadlineSegment:
    """A run of headline text; ticker segments carry a link."""

    text: str
    is_ticker: bool = False
    url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text, "isTicker": self.is_ticker}
        if self.url:
            data["url"] = self.url
        return data


def extract_tickers(headline: str) -> list[str]:
    """Known tickers appearing as standalone words, in order of first appearance."""
    words = _NON_ALNUM.sub(" ", headline.upper()).split()
    found: list[str] = []
    for word in words:
        if word in _KNOWN and word not in found:
            found.append(word)
    return found


def categorize(headline: str) -> NewsCategory:
    """Coarse mood/topic bucket used to color a headline."""
    lowered = headline.lower()
    for pattern, category in _CATEGORY_RULES:
        if pattern.search(lowered):
            return category
    return NewsCategory.MARKETS


def google_finance_url(ticker: str) -> str:
    """Google Finance quote page for a ticker, crypto pair, or index."""
    ticker = ticker.upper()
    if ticker in CRYPTO_FINANCE_SYMBOLS:
        return f"{GOOGLE_FINANCE_BASE}/{CRYPTO_FINANCE_SYMBOLS[ticker]}"
    if ticker in INDEX_FINANCE_SYMBOLS:
        return f"{GOOGLE_FINANCE_BASE}/{INDEX_FINANCE_SYMBOLS[ticker]}"
    return f"{GOOGLE_FINANCE_BASE}/{ticker}:NASDAQ"


def split_headline(headline: str) -> list[HeadlineSegment]:
    """Split a headline into plain text and linked ticker segments."""
    segments: list[HeadlineSegment] = []
    last = 0
    for match in _TICKER_WORDS.finditer(headline):
        if match.start() > last:
            segments.append(HeadlineSegment(headline[last:match.start()]))
        ticker = match.group(1).upper()
        segments.append(HeadlineSegment(ticker, is_ticker=True, url=google_finance_url(ticker)))
        last = match.end()
    if last < len(headline):
        segments.append(HeadlineSegment(headline[last:]))
    return segments
