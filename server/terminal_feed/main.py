"""
Terminal Feed Service Entry Point

Serves quotes and headlines to the retro terminal client over HTTP.
Runs in fallback mode (static payloads) when FINNHUB_API_KEY is not set.
"""
from __future__ import annotations

import asyncio
import logging
import signal

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


async def main() -> None:
    """
    Main entry point.

    1. Loads settings from the environment
    2. Builds the quote and news aggregators behind one HTTP server
    3. Serves until SIGINT/SIGTERM, then shuts down cleanly
    """
    from terminal_feed.config import load_settings
    from terminal_feed.http_server import TerminalFeedServer

    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)

    if not settings.finnhub.enabled:
        logger.warning("FINNHUB_API_KEY not set, serving fallback data only")

    server = TerminalFeedServer(settings)
    await server.start()

    shutdown_event = asyncio.Event()

    def signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        await shutdown_event.wait()
    finally:
        logger.info("Shutting down...")
        await server.stop()

        stats = server.get_stats()
        logger.info(
            "Final stats",
            extra={
                "quote_requests": stats.quote_requests,
                "news_requests": stats.news_requests,
                "feed_requests": stats.feed_requests,
                "quote_cache_hits": server.quotes.stats.cache_hits,
                "news_fallbacks": server.news.stats.fallbacks_served,
            },
        )


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
