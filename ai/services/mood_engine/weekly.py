from __future__ import annotations
from typing import List, Dict, Optional
from datetime import date, timedelta
from .models import (MOODS, MOOD_EMOJI, MOOD_LABEL, DistributionChart, TrendPoint, WeekDay,
                     mood_score)
from .local_day import WEEKDAY_ABBR, format_short_date, local_today, weekday_index
from .store import JournalState

# Day-by-day series for the weekly strip and the trend chart.
# Both walk back from today (inclusive) and list oldest first. A day without a
# check-in stays empty; it is never filled with a neutral or zero score.

def _window(state: JournalState, days: int, today: Optional[date]) -> List[date]:
    if days < 1:
        raise ValueError(f"window must be a positive number of days, got {days}")
    end = today or local_today(state.tz, state.now())
    return [end - timedelta(days=i) for i in range(days - 1, -1, -1)]

def week_series(state: JournalState, days: int = 7, today: Optional[date] = None) -> List[WeekDay]:
    out = []
    for d in _window(state, days, today):
        c = state.moods.find_by_local_day(d)
        out.append(WeekDay(label=WEEKDAY_ABBR[weekday_index(d)], date=d, mood=c.mood if c else None))
    return out

def trend_series(state: JournalState, window_days: int, today: Optional[date] = None) -> List[TrendPoint]:
    out = []
    for d in _window(state, window_days, today):
        c = state.moods.find_by_local_day(d)
        out.append(TrendPoint(label=format_short_date(d), date=d,
                              score=mood_score(c.mood) if c else None))
    return out

def mood_distribution(state: JournalState) -> Dict[str, int]:
    # all recorded history, not windowed
    counts = {m: 0 for m in MOODS}
    for c in state.moods.list_check_ins():
        if c.mood in counts:
            counts[c.mood] += 1
    return counts

def distribution_chart(state: JournalState) -> DistributionChart:
    counts = mood_distribution(state)
    return DistributionChart(
        labels=[f"{MOOD_EMOJI[m]} {MOOD_LABEL[m]}" for m in MOODS],
        data=[counts[m] for m in MOODS],
    )
