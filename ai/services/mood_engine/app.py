# -*- coding: utf-8 -*-
"""
Mood Journal local API
----------------------
JSON views for the journal front-end. One user, one machine; state is loaded
from the key-value file once and written back after every mutation.

- POST /entries, DELETE /entries/{id}, POST /moods  : mutations
- GET  /calendar/{year}/{month}, /week, /trends      : aggregated views
- GET  /distribution, /insights, /quote              : charts and extras
- GET  /healthz                                      : health check

Run with: uvicorn mood_engine.app:app
"""

from __future__ import annotations

import logging
import threading
from datetime import MAXYEAR, MINYEAR, date
from typing import Any, Dict, List, Literal, Optional

import httpx
from fastapi import FastAPI, Path, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from . import settings
from .insights import insights
from .local_day import format_long_date, resolve_timezone
from .models import MOODS, MOOD_EMOJI, MOOD_LABEL, TAGS, TAG_LABEL
from .monthly import calendar_cells_for_month, day_detail, month_title, shift_month
from .observability import get_logger, log_event
from .persistence import FileKeyValueStorage, check_in_record, entry_record, load_state, save_state
from .quotes import fetch_quote
from .store import JournalState
from .weekly import distribution_chart, trend_series, week_series

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = get_logger("app")

MoodId = Literal["happy", "calm", "neutral", "sad", "stressed", "anxious", "excited", "grateful"]
TagId = Literal["grateful", "stressful", "productive", "reflective", "peaceful", "challenging"]

MAX_TREND_WINDOW = 366


def _month_link(year: int, month: int) -> Optional[Dict[str, int]]:
    # the grid cannot go past the years `date` supports
    if not MINYEAR <= year <= MAXYEAR:
        return None
    return {"year": year, "month": month}


# ---------- Models ----------

class EntryCreateRequest(BaseModel):
    text: str = Field(..., description="Journal text; blank text is ignored")
    mood: Optional[MoodId] = Field(default=None, description="Mood snapshot for this entry")
    tags: List[TagId] = Field(default_factory=list)


class MoodSaveRequest(BaseModel):
    mood: MoodId


class DarkModeRequest(BaseModel):
    enabled: bool


# ---------- App ----------

def create_app(
    storage: Optional[Any] = None,
    state: Optional[JournalState] = None,
    quote_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    if state is None:
        if storage is None:
            storage = FileKeyValueStorage(settings.MOOD_JOURNAL_STORAGE_PATH)
        state = load_state(storage, tz=resolve_timezone(settings.MOOD_JOURNAL_TZ))

    app = FastAPI(title=settings.APP_NAME, version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.journal = state
    app.state.storage = storage
    register_journal_routes(app, state, storage, quote_client)
    return app


def register_journal_routes(
    app: FastAPI,
    state: JournalState,
    storage: Optional[Any],
    quote_client: Optional[httpx.AsyncClient] = None,
) -> None:
    lock = threading.Lock()

    def _persist() -> None:
        if storage is None:
            return
        save_state(storage, state)

    @app.get("/healthz")
    def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/moods")
    def list_moods() -> List[Dict[str, str]]:
        return [{"id": m, "emoji": MOOD_EMOJI[m], "label": MOOD_LABEL[m]} for m in MOODS]

    @app.get("/tags")
    def list_tags() -> List[Dict[str, str]]:
        return [{"id": t, "label": TAG_LABEL[t]} for t in TAGS]

    # --- entries ---

    @app.get("/entries")
    def get_entries(limit: Optional[int] = Query(default=None, ge=0)) -> List[Dict[str, Any]]:
        return [entry_record(e, state.tz) for e in state.entries.list_entries(limit)]

    @app.post("/entries")
    def post_entry(payload: EntryCreateRequest, response: Response) -> Dict[str, Any]:
        with lock:
            entry = state.entries.add_entry(payload.text, payload.mood, payload.tags)
            if entry is None:
                return {"status": "ignored"}
            _persist()
        log_event(logger, "entry_added", id=entry.id, mood=entry.mood)
        response.status_code = 201
        return {"status": "ok", "entry": entry_record(entry, state.tz)}

    @app.delete("/entries/{entry_id}", status_code=204, response_class=Response)
    def delete_entry(entry_id: int) -> Response:
        with lock:
            state.entries.delete_entry(entry_id)
            _persist()
        return Response(status_code=204)

    # --- moods ---

    @app.get("/moods/history")
    def get_mood_history() -> List[Dict[str, Any]]:
        return [check_in_record(c, state.tz) for c in state.moods.list_check_ins()]

    @app.get("/moods/today")
    def get_mood_today() -> Dict[str, Any]:
        c = state.moods.today(state.now())
        return {"mood": check_in_record(c, state.tz) if c else None}

    @app.post("/moods")
    def post_mood(payload: MoodSaveRequest) -> Dict[str, Any]:
        with lock:
            c = state.moods.save_mood(payload.mood)
            _persist()
        log_event(logger, "mood_saved", mood=c.mood)
        return {"status": "ok", "mood": check_in_record(c, state.tz)}

    # --- views ---

    @app.get("/calendar/day/{day}")
    def get_calendar_day(day: date) -> Dict[str, Any]:
        detail = day_detail(state, day)
        return {
            "date": day.isoformat(),
            "title": format_long_date(day),
            "entry": entry_record(detail["entry"], state.tz) if detail["entry"] else None,
            "mood": check_in_record(detail["check_in"], state.tz) if detail["check_in"] else None,
        }

    @app.get("/calendar/{year}/{month}")
    def get_calendar(
        year: int = Path(..., ge=MINYEAR, le=MAXYEAR),
        month: int = Path(..., ge=1, le=12),
    ) -> Dict[str, Any]:
        cells = calendar_cells_for_month(state, year, month)
        return {
            "title": month_title(year, month),
            "cells": [c.to_dict() for c in cells],
            "prev": _month_link(*shift_month(year, month, -1)),
            "next": _month_link(*shift_month(year, month, 1)),
        }

    @app.get("/week")
    def get_week() -> List[Dict[str, Any]]:
        return [d.to_dict() for d in week_series(state)]

    @app.get("/trends")
    def get_trends(window: int = Query(default=7, ge=1, le=MAX_TREND_WINDOW)) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in trend_series(state, window)]

    @app.get("/distribution")
    def get_distribution() -> Dict[str, Any]:
        return distribution_chart(state).to_dict()

    @app.get("/insights")
    def get_insights(full: bool = False) -> List[Dict[str, str]]:
        return [i.to_dict() for i in insights(state, full=full)]

    @app.get("/quote")
    async def get_quote() -> Dict[str, str]:
        q = await fetch_quote(quote_client)
        return q.to_dict()

    # --- settings ---

    @app.get("/settings/dark-mode")
    def get_dark_mode() -> Dict[str, bool]:
        return {"enabled": state.dark_mode}

    @app.put("/settings/dark-mode")
    def put_dark_mode(payload: DarkModeRequest) -> Dict[str, bool]:
        with lock:
            state.dark_mode = payload.enabled
            _persist()
        return {"enabled": state.dark_mode}

    @app.post("/settings/dark-mode/toggle")
    def toggle_dark_mode() -> Dict[str, bool]:
        with lock:
            enabled = state.toggle_dark_mode()
            _persist()
        return {"enabled": enabled}


app = create_app()
