"""
Rotating Feed Builder

Combines one news result and one quote result into the queue the terminal
rotates through: every headline in order, with up to three quote cards
dropped in at random positions.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any, Optional

from terminal_feed.display.headlines import (
    HeadlineSegment,
    categorize,
    extract_tickers,
    split_headline,
)
from terminal_feed.models import (
    DataSource,
    NewsCategory,
    NewsItem,
    NewsResult,
    Quote,
    QuotesResult,
)

MAX_QUOTE_CARDS = 3

SAMPLE_DATA_BANNER = "USING SAMPLE DATA - Add FINNHUB_API_KEY for live news"


@dataclass(frozen=True)
class FeedEntry:
    """One card in the rotating display."""

    type: str  # "news" | "quote"
    headline: str
    category: str
    tickers: tuple[str, ...] = ()
    source: str = ""
    url: str = ""
    segments: tuple[HeadlineSegment, ...] = ()
    quote: Optional[Quote] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "headline": self.headline,
            "category": self.category,
            "tickers": list(self.tickers),
        }
        if self.source:
            data["source"] = self.source
        if self.url:
            data["url"] = self.url
        if self.segments:
            data["segments"] = [s.to_dict() for s in self.segments]
        if self.quote is not None:
            data["quote"] = self.quote.to_dict()
        return data


@dataclass(frozen=True)
class FeedResult:
    """The combined display queue plus provenance of each half."""

    entries: tuple[FeedEntry, ...]
    news_source: DataSource
    quotes_source: DataSource
    banner: Optional[str] = None
    quotes: tuple[Quote, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "items": [e.to_dict() for e in self.entries],
            "quotes": [q.to_dict() for q in self.quotes],
            "sources": {
                "news": self.news_source.value,
                "quotes": self.quotes_source.value,
            },
        }
        if self.banner:
            data["banner"] = self.banner
        return data


def news_entry(item: NewsItem) -> FeedEntry:
    """Upstream ticker wins; otherwise tickers are pulled from the headline text."""
    if item.related:
        tickers = (item.related.split(",")[0].strip(),)
    else:
        tickers = tuple(extract_tickers(item.headline))

    return FeedEntry(
        type="news",
        headline=item.headline,
        category=categorize(item.headline).value,
        tickers=tickers,
        source=item.source,
        url=item.url,
        segments=tuple(split_headline(item.headline)),
    )


def quote_entry(quote: Quote) -> FeedEntry:
    arrow = "▲" if quote.change_percent >= 0 else "▼"
    return FeedEntry(
        type="quote",
        headline=f"{quote.symbol} {arrow} {quote.change_percent:.2f}%",
        category=NewsCategory.CRYPTO.value,
        tickers=(quote.symbol,),
        quote=quote,
    )


def build_feed(
    news: NewsResult,
    quotes: QuotesResult,
    *,
    rng: Optional[random.Random] = None,
) -> FeedResult:
    """
    Interleave quote cards into the headline list.

    A non-empty headline list always leads with a headline. ``rng`` controls
    which quotes are shown and where; pass a seeded Random for reproducible
    output.
    """
    rng = rng or random.Random()

    combined = [news_entry(item) for item in news.headlines]

    quote_cards = [quote_entry(q) for q in quotes.quotes]
    rng.shuffle(quote_cards)

    for i, card in enumerate(quote_cards[:MAX_QUOTE_CARDS]):
        position = math.floor(rng.random() * (len(combined) - 1)) + 1 + i
        combined.insert(min(max(position, 0), len(combined)), card)

    banner = SAMPLE_DATA_BANNER if news.source is DataSource.FALLBACK else None

    return FeedResult(
        entries=tuple(combined),
        news_source=news.source,
        quotes_source=quotes.source,
        banner=banner,
        quotes=quotes.quotes,
    )
