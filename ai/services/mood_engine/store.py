# -*- coding: utf-8 -*-
"""store.py

In-memory journal state
-----------------------

- EntryStore: journal entries, newest first. Entries are immutable; the only
  mutations are add (prepend) and delete.
- MoodLog: daily mood check-ins, newest first, at most one per local day.
  Saving again on the same local day replaces the check-in in place.
- JournalState: the aggregate handed to every aggregator function.

An entry's ``mood`` is a snapshot copied when the entry is written. It is
never re-linked to the MoodLog afterwards, in either direction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Callable, Iterable, List, Optional, Sequence, Union

from .local_day import as_utc, local_day_key, utcnow
from .models import JournalEntry, MoodCheckIn, normalize_tags, require_mood
from .observability import get_logger, log_event

logger = get_logger("store")

Clock = Callable[[], datetime]


class MoodLog:
    def __init__(
        self,
        check_ins: Optional[Iterable[MoodCheckIn]] = None,
        *,
        tz: Optional[tzinfo] = None,
        clock: Clock = utcnow,
    ) -> None:
        self._items: List[MoodCheckIn] = list(check_ins or [])
        self.tz = tz
        self.clock = clock

    def __len__(self) -> int:
        return len(self._items)

    def _index_for_day(self, day: Union[date, datetime]) -> int:
        key = local_day_key(day, self.tz)
        for i, c in enumerate(self._items):
            if local_day_key(c.occurred_at, self.tz) == key:
                return i
        return -1

    def save_mood(self, mood: str, at: Optional[datetime] = None) -> MoodCheckIn:
        check_in = MoodCheckIn(mood=require_mood(mood), occurred_at=as_utc(at or self.clock()))
        idx = self._index_for_day(check_in.occurred_at)
        if idx != -1:
            self._items[idx] = check_in
        else:
            self._items.insert(0, check_in)
        log_event(logger, "mood_saved", level="debug", mood=mood, replaced=idx != -1)
        return check_in

    def find_by_local_day(self, day: Union[date, datetime]) -> Optional[MoodCheckIn]:
        idx = self._index_for_day(day)
        return self._items[idx] if idx != -1 else None

    def today(self, now: Optional[datetime] = None) -> Optional[MoodCheckIn]:
        return self.find_by_local_day(now or self.clock())

    def list_check_ins(self) -> List[MoodCheckIn]:
        return list(self._items)


class EntryStore:
    def __init__(
        self,
        entries: Optional[Iterable[JournalEntry]] = None,
        *,
        mood_log: Optional[MoodLog] = None,
        clock: Clock = utcnow,
    ) -> None:
        self._items: List[JournalEntry] = list(entries or [])
        self.mood_log = mood_log if mood_log is not None else MoodLog(clock=clock)
        self.clock = clock
        self._last_id = max((e.id for e in self._items), default=0)

    def __len__(self) -> int:
        return len(self._items)

    def _next_id(self, created_at: datetime) -> int:
        # millisecond timestamp, bumped when the clock has not moved on
        candidate = int(created_at.timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def add_entry(
        self,
        text: str,
        mood: Optional[str] = None,
        tags: Sequence[str] = (),
    ) -> Optional[JournalEntry]:
        body = (text or "").strip()
        if not body:
            return None
        if mood is not None:
            require_mood(mood)
        clean_tags = normalize_tags(tags)

        created_at = as_utc(self.clock())
        entry = JournalEntry(
            id=self._next_id(created_at),
            created_at=created_at,
            text=body,
            mood=mood,
            tags=clean_tags,
        )
        self._items.insert(0, entry)
        if mood is not None:
            self.mood_log.save_mood(mood, created_at)
        log_event(logger, "entry_added", level="debug", id=entry.id, mood=mood, n_tags=len(clean_tags))
        return entry

    def delete_entry(self, entry_id: int) -> None:
        before = len(self._items)
        self._items = [e for e in self._items if e.id != entry_id]
        if len(self._items) != before:
            log_event(logger, "entry_deleted", level="debug", id=entry_id)

    def list_entries(self, limit: Optional[int] = None) -> List[JournalEntry]:
        if limit is None:
            return list(self._items)
        return self._items[: max(0, limit)]


@dataclass
class JournalState:
    entries: EntryStore
    moods: MoodLog
    dark_mode: bool = False
    tz: Optional[tzinfo] = None
    clock: Clock = field(default=utcnow)

    @classmethod
    def create(
        cls,
        entries: Iterable[JournalEntry] = (),
        check_ins: Iterable[MoodCheckIn] = (),
        *,
        dark_mode: bool = False,
        tz: Optional[tzinfo] = None,
        clock: Clock = utcnow,
    ) -> "JournalState":
        mood_log = MoodLog(check_ins, tz=tz, clock=clock)
        store = EntryStore(entries, mood_log=mood_log, clock=clock)
        return cls(entries=store, moods=mood_log, dark_mode=dark_mode, tz=tz, clock=clock)

    def now(self) -> datetime:
        return self.clock()

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode
