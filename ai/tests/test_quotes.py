import asyncio
import random

import httpx

from mood_engine.quotes import FALLBACK_QUOTES, Quote, fetch_quote


def _run(handler, **kwargs):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_quote(client, url="https://quotes.test/quotes", **kwargs)
    return asyncio.run(go())


def test_picks_quote_from_payload():
    def handler(request):
        return httpx.Response(200, json={"quotes": [{"id": 1, "quote": "Keep going.", "author": "Someone"}]})

    assert _run(handler) == Quote(text="Keep going.", author="Someone")


def test_server_error_falls_back():
    q = _run(lambda request: httpx.Response(500, text="oops"))
    assert q in FALLBACK_QUOTES


def test_malformed_payload_falls_back():
    assert _run(lambda request: httpx.Response(200, json={"items": []})) in FALLBACK_QUOTES
    assert _run(lambda request: httpx.Response(200, json={"quotes": []})) in FALLBACK_QUOTES
    assert _run(lambda request: httpx.Response(200, text="<html>")) in FALLBACK_QUOTES


def test_transport_error_falls_back_once():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("offline", request=request)

    q = _run(handler, rng=random.Random(3))
    assert q in FALLBACK_QUOTES
    assert len(calls) == 1


def test_fallback_list_has_eight_quotes():
    assert len(FALLBACK_QUOTES) == 8
    assert len(set(FALLBACK_QUOTES)) == 8
