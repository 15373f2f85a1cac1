from __future__ import annotations
from typing import List, Dict, Any, Optional, Tuple
import calendar
from datetime import date
from .models import CalendarCell, JournalEntry, MoodCheckIn
from .local_day import MONTH_NAMES, local_day_key, local_today, weekday_index
from .store import JournalState

# Month grid for the calendar view.
# Policy:
# - Leading placeholders so day 1 sits in its weekday column (Sunday = 0).
# - One entry per cell: the first match in store order (newest first). Other
#   entries on the same day are not surfaced.

def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1

def month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"

def _first_entry_on(entries: List[JournalEntry], day: date, state: JournalState) -> Optional[JournalEntry]:
    key = local_day_key(day)
    for e in entries:
        if local_day_key(e.created_at, state.tz) == key:
            return e
    return None

def day_detail(state: JournalState, day: date) -> Dict[str, Any]:
    """Selected-day panel: the day's entry and check-in, either may be None."""
    entry = _first_entry_on(state.entries.list_entries(), day, state)
    check_in: Optional[MoodCheckIn] = state.moods.find_by_local_day(day)
    return {"date": day, "entry": entry, "check_in": check_in}

def calendar_cells_for_month(state: JournalState, year: int, month: int,
                             today: Optional[date] = None) -> List[CalendarCell]:
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    today = today or local_today(state.tz, state.now())
    first = date(year, month, 1)
    n_days = calendar.monthrange(year, month)[1]

    cells = [CalendarCell() for _ in range(weekday_index(first))]
    entries = state.entries.list_entries()
    for d in range(1, n_days + 1):
        day = date(year, month, d)
        cells.append(CalendarCell(
            date=day,
            entry=_first_entry_on(entries, day, state),
            check_in=state.moods.find_by_local_day(day),
            is_today=(day == today),
        ))
    return cells
