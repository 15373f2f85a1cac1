# -*- coding: utf-8 -*-
"""persistence.py

Key-value persistence boundary
------------------------------

The journal keeps its state under three fixed keys, each holding a
JSON-encoded string (the same shape browser local storage uses):

- journalEntries : list of entries, newest first
- moodHistory    : list of mood check-ins, newest first
- darkMode       : boolean

Loading fails soft: a missing key, invalid JSON or a value of the wrong shape
means "absent" and the default is used. Records that do not validate are
skipped one by one, so one bad row does not drop the rest of the list.
There is no schema versioning.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from .local_day import as_utc, format_entry_date, local_day_key, utcnow
from .models import JournalEntry, MoodCheckIn, MOOD_SCORES, TAG_LABEL, iso_z
from .observability import get_logger, log_event
from .store import Clock, JournalState

logger = get_logger("persistence")

ENTRIES_KEY = "journalEntries"
MOODS_KEY = "moodHistory"
DARK_MODE_KEY = "darkMode"


class FileKeyValueStorage:
    """A JSON object on disk: {key: json-encoded string}."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log_event(logger, "storage_file_unreadable", level="warning", path=self.path, error=str(exc))
            return {}
        if not isinstance(data, dict):
            log_event(logger, "storage_file_unreadable", level="warning", path=self.path, error="not an object")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_many(self, values: Dict[str, str]) -> None:
        data = self._read_all()
        data.update(values)
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".mood_journal_", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp, self.path)
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


# ---------- Stored shapes ----------

class StoredEntry(BaseModel):
    id: int
    date: datetime
    text: str = Field(..., min_length=1)
    mood: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    localDate: Optional[str] = None


class StoredCheckIn(BaseModel):
    mood: str
    date: datetime
    localDate: Optional[str] = None


def _load_json(storage, key: str) -> Any:
    raw = storage.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        log_event(logger, "storage_value_corrupt", level="warning", key=key)
        return None


def _load_list(storage, key: str) -> List[Any]:
    value = _load_json(storage, key)
    if value is None:
        return []
    if not isinstance(value, list):
        log_event(logger, "storage_value_corrupt", level="warning", key=key, reason="not a list")
        return []
    return value


def parse_entries(rows: List[Any]) -> Tuple[List[JournalEntry], int]:
    out: List[JournalEntry] = []
    skipped = 0
    for row in rows:
        try:
            s = StoredEntry.model_validate(row)
        except ValidationError:
            skipped += 1
            continue
        text = s.text.strip()
        if not text:
            skipped += 1
            continue
        tags: List[str] = []
        for t in s.tags:
            if t in TAG_LABEL and t not in tags:
                tags.append(t)
        out.append(JournalEntry(
            id=s.id,
            created_at=as_utc(s.date),
            text=text,
            mood=s.mood if s.mood in MOOD_SCORES else None,
            tags=tuple(tags),
        ))
    return out, skipped


def parse_check_ins(rows: List[Any], tz: Optional[tzinfo] = None) -> Tuple[List[MoodCheckIn], int, int]:
    """Stored rows -> check-ins, plus the counts of invalid and same-day rows dropped.

    Rows are newest first, so the first row seen for a local day is the one kept.
    """
    out: List[MoodCheckIn] = []
    seen_days = set()
    skipped = 0
    duplicates = 0
    for row in rows:
        try:
            s = StoredCheckIn.model_validate(row)
        except ValidationError:
            skipped += 1
            continue
        if s.mood not in MOOD_SCORES:
            skipped += 1
            continue
        occurred_at = as_utc(s.date)
        day = local_day_key(occurred_at, tz)
        if day in seen_days:
            duplicates += 1
            continue
        seen_days.add(day)
        out.append(MoodCheckIn(mood=s.mood, occurred_at=occurred_at))
    return out, skipped, duplicates


def load_state(storage, *, tz: Optional[tzinfo] = None, clock: Clock = utcnow) -> JournalState:
    entries, skipped_entries = parse_entries(_load_list(storage, ENTRIES_KEY))
    check_ins, skipped_moods, duplicate_days = parse_check_ins(_load_list(storage, MOODS_KEY), tz)

    dark = _load_json(storage, DARK_MODE_KEY)
    if dark is not None and not isinstance(dark, bool):
        log_event(logger, "storage_value_corrupt", level="warning", key=DARK_MODE_KEY, reason="not a bool")
        dark = None

    if skipped_entries or skipped_moods or duplicate_days:
        log_event(logger, "storage_rows_skipped", level="warning",
                  entries=skipped_entries, moods=skipped_moods, duplicate_days=duplicate_days)
    log_event(logger, "state_loaded", entries=len(entries), moods=len(check_ins))
    return JournalState.create(entries, check_ins, dark_mode=bool(dark), tz=tz, clock=clock)


def entry_record(entry: JournalEntry, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    d = entry.to_dict()
    d["localDate"] = format_entry_date(entry.created_at, tz)
    return d


def check_in_record(check_in: MoodCheckIn, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    return {
        "mood": check_in.mood,
        "date": iso_z(check_in.occurred_at),
        "localDate": format_entry_date(check_in.occurred_at, tz),
    }


def save_state(storage, state: JournalState) -> None:
    entries = [entry_record(e, state.tz) for e in state.entries.list_entries()]
    moods = [check_in_record(c, state.tz) for c in state.moods.list_check_ins()]
    storage.set_many({
        ENTRIES_KEY: json.dumps(entries, ensure_ascii=False),
        MOODS_KEY: json.dumps(moods, ensure_ascii=False),
        DARK_MODE_KEY: json.dumps(state.dark_mode),
    })
