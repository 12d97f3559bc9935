"""
Terminal Feed Service

Backend for a retro terminal display that cycles through financial
headlines and crypto prices. Proxies Finnhub, caches quotes for 15 minutes,
and merges several news queries into one short ticker-first headline list.

Architecture:
    Finnhub (external) -> finnhub_client -> [quotes, news] -> display -> http_server

Components:
    - finnhub_client: async REST client and payload normalizer
    - quotes: quote aggregator with single-snapshot TTL cache
    - news: news aggregator, crypto ticker tagger, merge pipeline
    - display: headline refinement and rotating feed assembly
    - http_server: aiohttp JSON endpoints for the terminal client
"""
