"""
Tests for terminal_feed.finnhub_client.client

Runs the client against an in-process aiohttp server standing in for Finnhub,
no network access required.
"""
import asyncio
from datetime import date

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from terminal_feed.core.types import UpstreamError
from terminal_feed.finnhub_client import FinnhubClient


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
async def fake_finnhub():
    """
    Minimal Finnhub stand-in. Yields (server, requests) where ``requests``
    records (path, query) for every call.

    Behaviour switches by query value:
      symbol=BROKEN    -> 500
      symbol=SLOW      -> sleeps past any test timeout
      category=weird   -> JSON object instead of list
    """
    requests: list[tuple[str, dict[str, str]]] = []

    async def quote(request: web.Request) -> web.Response:
        requests.append((request.path, dict(request.query)))
        symbol = request.query.get("symbol")
        if symbol == "BROKEN":
            return web.json_response({"error": "internal"}, status=500)
        if symbol == "SLOW":
            await asyncio.sleep(1)
        return web.json_response({"c": 101.5, "d": 1.5, "dp": 1.5, "h": 102, "l": 99, "o": 100, "pc": 100})

    async def news(request: web.Request) -> web.Response:
        requests.append((request.path, dict(request.query)))
        if request.query.get("category") == "weird":
            return web.json_response({"error": "unexpected"})
        return web.json_response([{"headline": "Markets rally", "datetime": 1}])

    async def company_news(request: web.Request) -> web.Response:
        requests.append((request.path, dict(request.query)))
        return web.json_response([{"headline": f"{request.query['symbol']} news", "datetime": 2}])

    app = web.Application()
    app.router.add_get("/api/v1/quote", quote)
    app.router.add_get("/api/v1/news", news)
    app.router.add_get("/api/v1/company-news", company_news)

    server = TestServer(app)
    await server.start_server()
    yield server, requests
    await server.close()


@pytest.fixture
async def client(fake_finnhub):
    server, _ = fake_finnhub
    async with FinnhubClient(
        "test-token",
        base_url=str(server.make_url("/api/v1")),
        timeout_seconds=0.2,
    ) as finnhub:
        yield finnhub


# ── construction ─────────────────────────────────────────────────────────────

def test_empty_api_key_rejected():
    with pytest.raises(ValueError, match="api_key"):
        FinnhubClient("")


# ── endpoints ────────────────────────────────────────────────────────────────

async def test_get_quote_sends_symbol_and_token(client, fake_finnhub):
    _, requests = fake_finnhub

    payload = await client.get_quote("BINANCE:BTCUSDT")

    assert payload["c"] == 101.5
    assert requests == [
        ("/api/v1/quote", {"symbol": "BINANCE:BTCUSDT", "token": "test-token"})
    ]


async def test_get_category_news(client, fake_finnhub):
    _, requests = fake_finnhub

    items = await client.get_category_news("crypto")

    assert items == [{"headline": "Markets rally", "datetime": 1}]
    assert requests[0][1]["category"] == "crypto"


async def test_get_company_news_sends_iso_date_range(client, fake_finnhub):
    _, requests = fake_finnhub

    items = await client.get_company_news("NVDA", date(2026, 10, 14), date(2026, 10, 17))

    assert items[0]["headline"] == "NVDA news"
    path, query = requests[0]
    assert path == "/api/v1/company-news"
    assert query["from"] == "2026-10-14"
    assert query["to"] == "2026-10-17"


# ── failures ─────────────────────────────────────────────────────────────────

async def test_non_success_status_raises_upstream_error(client):
    with pytest.raises(UpstreamError, match="500") as exc_info:
        await client.get_quote("BROKEN")

    assert exc_info.value.status == 500
    assert exc_info.value.service == "finnhub"
    assert "test-token" not in str(exc_info.value)


async def test_timeout_raises_upstream_error(client):
    with pytest.raises(UpstreamError, match="timed out") as exc_info:
        await client.get_quote("SLOW")

    assert exc_info.value.status is None


async def test_unexpected_news_shape_raises_upstream_error(client):
    with pytest.raises(UpstreamError, match="Unexpected news payload"):
        await client.get_category_news("weird")


async def test_connection_refused_raises_upstream_error():
    async with FinnhubClient("t", base_url="http://127.0.0.1:1", timeout_seconds=1) as finnhub:
        with pytest.raises(UpstreamError, match="request failed"):
            await finnhub.get_quote("BINANCE:BTCUSDT")


async def test_stats_track_failures(client):
    await client.get_quote("BINANCE:BTCUSDT")
    with pytest.raises(UpstreamError):
        await client.get_quote("BROKEN")

    assert client.get_stats() == {"requests_made": 2, "requests_failed": 1}
