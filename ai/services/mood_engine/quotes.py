# -*- coding: utf-8 -*-
"""quotes.py

Daily inspiration quote
-----------------------

- One GET against MOOD_QUOTE_API_URL, no retries.
- On any failure (transport error, non-2xx, malformed payload) pick one of the
  built-in fallback quotes. Callers never see an exception from here.
- The quote has no effect on journal state.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import httpx

from . import settings
from .observability import get_logger, log_event

logger = get_logger("quotes")


@dataclass(frozen=True)
class Quote:
    text: str
    author: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


FALLBACK_QUOTES: List[Quote] = [
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("In the middle of difficulty lies opportunity.", "Albert Einstein"),
    Quote(
        "What lies behind us and what lies before us are tiny matters compared to what lies within us.",
        "Ralph Waldo Emerson",
    ),
    Quote(
        "The greatest glory in living lies not in never falling, but in rising every time we fall.",
        "Nelson Mandela",
    ),
    Quote("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    Quote("Happiness is not something ready made. It comes from your own actions.", "Dalai Lama"),
    Quote("The mind is everything. What you think you become.", "Buddha"),
    Quote("Peace comes from within. Do not seek it without.", "Buddha"),
]


class QuotePayloadError(ValueError):
    """Quote API answered with something we cannot use."""


def fallback_quote(rng: Optional[random.Random] = None) -> Quote:
    return (rng or random).choice(FALLBACK_QUOTES)


def _pick_quote(payload: Any, rng: Optional[random.Random] = None) -> Quote:
    quotes = payload.get("quotes") if isinstance(payload, dict) else None
    if not isinstance(quotes, list) or not quotes:
        raise QuotePayloadError("missing quotes list")
    item = (rng or random).choice(quotes)
    if not isinstance(item, dict):
        raise QuotePayloadError("quote item is not an object")
    text = str(item.get("quote") or "").strip()
    author = str(item.get("author") or "").strip()
    if not text:
        raise QuotePayloadError("quote text is empty")
    return Quote(text=text, author=author)


async def fetch_quote(
    client: Optional[httpx.AsyncClient] = None,
    *,
    url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> Quote:
    """Fetch a random quote (best-effort)."""
    target = url or settings.MOOD_QUOTE_API_URL
    t = float(timeout_seconds or settings.MOOD_QUOTE_TIMEOUT_SECONDS)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=t) as c:
                resp = await c.get(target)
        else:
            resp = await client.get(target, timeout=t)
        resp.raise_for_status()
        return _pick_quote(resp.json(), rng)
    except (httpx.HTTPError, ValueError) as exc:
        log_event(logger, "quote_fetch_failed", level="warning",
                  url=target, error=f"{type(exc).__name__}: {exc}")
        return fallback_quote(rng)
