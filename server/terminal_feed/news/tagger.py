"""
Crypto Ticker Tagger

Guesses the related instrument of a crypto headline. Patterns are evaluated
in order and the first match wins, so rarer terms come before the broad
bitcoin catch-all that would otherwise shadow them. All matches are
whole-word and case-insensitive.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickerPattern:
    """A compiled whole-word pattern bound to one instrument code."""

    pattern: re.Pattern[str]
    ticker: str

    @classmethod
    def for_terms(cls, ticker: str, *terms: str) -> TickerPattern:
        alternatives = "|".join(re.escape(t) for t in terms)
        return cls(re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE), ticker)


# Order matters: BTC stays last as the catch-all
DEFAULT_CRYPTO_PATTERNS: tuple[TickerPattern, ...] = (
    TickerPattern.for_terms("XRP", "xrp", "ripple"),
    TickerPattern.for_terms("SOL", "solana", "sol"),
    TickerPattern.for_terms("DOGE", "doge", "dogecoin"),
    TickerPattern.for_terms("ETH", "ethereum", "eth"),
    TickerPattern.for_terms("BTC", "bitcoin", "btc"),
)


@dataclass
class TaggerStats:
    """Statistics for the tagger."""

    headlines_seen: int = 0
    headlines_tagged: int = 0


class CryptoTickerTagger:
    """Ordered (pattern, ticker) matcher for crypto headlines."""

    def __init__(self, patterns: Optional[Iterable[TickerPattern]] = None) -> None:
        self._patterns = tuple(patterns) if patterns is not None else DEFAULT_CRYPTO_PATTERNS
        self._stats = TaggerStats()

    @property
    def patterns(self) -> tuple[TickerPattern, ...]:
        return self._patterns

    @property
    def stats(self) -> TaggerStats:
        return self._stats

    def tag(self, headline: str) -> str:
        """Return the ticker of the first matching pattern, or "" when none match."""
        self._stats.headlines_seen += 1
        if not headline:
            return ""

        for entry in self._patterns:
            if entry.pattern.search(headline):
                self._stats.headlines_tagged += 1
                return entry.ticker

        logger.debug("No crypto ticker matched", extra={"headline": headline[:80]})
        return ""
