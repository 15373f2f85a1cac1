# -*- coding: utf-8 -*-
"""observability.py

Structured logging
------------------

- Emit one JSON line per event so logs can be filtered by event name.
- A logging failure never breaks the caller.

MOOD_LOG_JSON=true/false (default true)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from . import settings
from .models import iso_z


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"mood_engine.{name}")


def format_event(event: str, fields: Dict[str, Any]) -> str:
    payload: Dict[str, Any] = {"ts": iso_z(datetime.now(timezone.utc)), "event": event, **fields}
    if not settings.MOOD_LOG_JSON:
        return f"{event} {payload}"
    # unknown values (datetimes, tuples of ids) are logged via str()
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def log_event(logger: logging.Logger, event: str, *, level: str = "info", **fields: Any) -> None:
    """Write a structured event log.

    - level: info|warning|error|debug
    - event: stable identifier (e.g., entry_added, storage_value_corrupt)
    """
    try:
        getattr(logger, level, logger.info)(format_event(event, fields))
    except Exception:
        logger.exception("log_event_failed event=%s", event)
