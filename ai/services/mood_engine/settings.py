# -*- coding: utf-8 -*-
"""settings.py

Environment configuration
-------------------------

All knobs are plain environment variables read once at import time.
Malformed values fall back to the default instead of failing startup.

- MOOD_JOURNAL_TZ             IANA timezone for day bucketing (default: system local)
- MOOD_JOURNAL_STORAGE_PATH   key-value JSON file (default: ./data/mood_journal.json)
- MOOD_QUOTE_API_URL          quote endpoint (default: https://dummyjson.com/quotes)
- MOOD_QUOTE_TIMEOUT_SECONDS  quote request timeout (default: 5.0)
- MOOD_LOG_JSON               true/false, JSON log lines (default: true)
- MOOD_APP_NAME / MOOD_CORS_ORIGINS
"""

from __future__ import annotations

import os
from typing import List


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip() or default


def _env_truthy(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "y", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(str(raw).strip())
    except Exception:
        return default


def _env_list(name: str, default: str) -> List[str]:
    raw = _env_str(name, default)
    return [p.strip() for p in raw.split(",") if p.strip()]


MOOD_JOURNAL_TZ = (os.getenv("MOOD_JOURNAL_TZ") or "").strip()
MOOD_JOURNAL_STORAGE_PATH = _env_str("MOOD_JOURNAL_STORAGE_PATH", os.path.join("data", "mood_journal.json"))

MOOD_QUOTE_API_URL = _env_str("MOOD_QUOTE_API_URL", "https://dummyjson.com/quotes")
MOOD_QUOTE_TIMEOUT_SECONDS = max(0.5, _env_float("MOOD_QUOTE_TIMEOUT_SECONDS", 5.0))

MOOD_LOG_JSON = _env_truthy("MOOD_LOG_JSON", True)

APP_NAME = _env_str("MOOD_APP_NAME", "My Journal")
ALLOWED_ORIGINS = _env_list("MOOD_CORS_ORIGINS", "*")
