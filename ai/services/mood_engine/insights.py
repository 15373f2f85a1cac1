from __future__ import annotations
from typing import List, Dict, Optional
from .models import MOODS, MOOD_EMOJI, MOOD_LABEL, Insight, MoodCheckIn, mood_score
from .store import JournalState

# Heuristic insights shown next to the charts.
# Policy:
# - No check-ins: a single "start tracking" prompt, nothing else.
# - Week tone from the 7 most recent check-ins in list order (not the last 7
#   calendar days; skipped days are not counted).
# - Most common mood over the whole log; ties go to the first mood in MOODS.
# - Full variant only: an encouragement once 3+ entries exist.

RECENT_WINDOW = 7
ENTRY_ENCOURAGE_MIN = 3

_TEXT: Dict[str, Dict[str, str]] = {
    "quick": {
        "empty": "Start tracking your mood to see insights!",
        "great": "You've had a wonderful week!",
        "tough": "Tough week. You've got this!",
        "balanced": "Balanced week overall",
        "common": "Mostly {emoji} lately",
    },
    "full": {
        "empty": "Start tracking your mood to see insights!",
        "great": "You've had a great week! Keep up the positive mindset!",
        "tough": "This week has been challenging. Remember to be kind to yourself.",
        "balanced": "Your mood has been balanced this week.",
        "common": "Your most common mood is {emoji} {label}",
        "entries": "You've written {n} journal entries. Great job reflecting!",
    },
}

def recent_average(check_ins: List[MoodCheckIn], window: int = RECENT_WINDOW) -> Optional[float]:
    recent = check_ins[:window]
    if not recent:
        return None
    return sum(mood_score(c.mood) for c in recent) / len(recent)

def most_common_mood(check_ins: List[MoodCheckIn]) -> Optional[str]:
    # keep the first strictly greater count, so enumeration order breaks ties
    best, best_count = None, 0
    for m in MOODS:
        n = sum(1 for c in check_ins if c.mood == m)
        if n > best_count:
            best, best_count = m, n
    return best

def insights(state: JournalState, full: bool = False) -> List[Insight]:
    text = _TEXT["full" if full else "quick"]
    check_ins = state.moods.list_check_ins()
    if not check_ins:
        return [Insight(icon="💭", text=text["empty"])]

    out: List[Insight] = []
    avg = recent_average(check_ins)
    if avg >= 4:
        out.append(Insight(icon="🌟", text=text["great"]))
    elif avg <= 2:
        out.append(Insight(icon="💙", text=text["tough"]))
    else:
        out.append(Insight(icon="⚖️", text=text["balanced"]))

    top = most_common_mood(check_ins)
    if top:
        out.append(Insight(icon="📊", text=text["common"].format(emoji=MOOD_EMOJI[top], label=MOOD_LABEL[top])))

    if full:
        n = len(state.entries)
        if n >= ENTRY_ENCOURAGE_MIN:
            out.append(Insight(icon="📝", text=text["entries"].format(n=n)))
    return out
