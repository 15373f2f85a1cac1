from __future__ import annotations
from dataclasses import dataclass, field, asdict
from datetime import date, datetime, timezone
from typing import List, Dict, Optional, Any, Tuple

# Order matters: ties in "most common mood" resolve to the first mood listed here.
MOODS = ["happy", "calm", "neutral", "sad", "stressed", "anxious", "excited", "grateful"]

MOOD_EMOJI: Dict[str, str] = {
    "happy": "😊",
    "calm": "😌",
    "neutral": "😐",
    "sad": "😢",
    "stressed": "😰",
    "anxious": "😟",
    "excited": "🤩",
    "grateful": "🙏",
}

MOOD_LABEL: Dict[str, str] = {m: m.capitalize() for m in MOODS}

MOOD_SCORES: Dict[str, int] = {
    "happy": 5, "grateful": 5, "excited": 5,
    "calm": 4, "neutral": 3, "sad": 2,
    "anxious": 1, "stressed": 1,
}
DEFAULT_SCORE = 3

# Chart axis wording for scores 1..5
SCORE_LABELS = ["", "Low", "Sad", "Neutral", "Good", "Great"]

TAGS = ["grateful", "stressful", "productive", "reflective", "peaceful", "challenging"]

TAG_LABEL: Dict[str, str] = {
    "grateful": "🌟 Grateful",
    "stressful": "🤔 Stressful",
    "productive": "✨ Productive",
    "reflective": "💪 Reflective",
    "peaceful": "☮️ Peaceful",
    "challenging": "🔥 Challenging",
}


def mood_score(mood: Optional[str]) -> int:
    return MOOD_SCORES.get(mood or "", DEFAULT_SCORE)


def score_label(score: Optional[int]) -> str:
    if score is None or not (1 <= score < len(SCORE_LABELS)):
        return "N/A"
    return SCORE_LABELS[score]


def mood_emoji(mood: Optional[str]) -> str:
    return MOOD_EMOJI.get(mood or "", "")


def require_mood(mood: str) -> str:
    if mood not in MOOD_SCORES:
        raise ValueError(f"unknown mood id: {mood!r}")
    return mood


def normalize_tags(tags) -> Tuple[str, ...]:
    """De-duplicate tags keeping first-seen order; unknown ids are rejected."""
    out: List[str] = []
    for t in tags or ():
        if t not in TAG_LABEL:
            raise ValueError(f"unknown tag id: {t!r}")
        if t not in out:
            out.append(t)
    return tuple(out)


def iso_z(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class JournalEntry:
    id: int
    created_at: datetime  # aware, UTC
    text: str
    mood: Optional[str] = None  # snapshot taken at creation
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": iso_z(self.created_at),
            "text": self.text,
            "mood": self.mood,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class MoodCheckIn:
    mood: str
    occurred_at: datetime  # aware, UTC

    @property
    def score(self) -> int:
        return mood_score(self.mood)

    def to_dict(self) -> Dict[str, Any]:
        return {"mood": self.mood, "date": iso_z(self.occurred_at)}


@dataclass
class CalendarCell:
    date: Optional[date] = None  # None = leading placeholder
    entry: Optional[JournalEntry] = None
    check_in: Optional[MoodCheckIn] = None
    is_today: bool = False

    @property
    def is_placeholder(self) -> bool:
        return self.date is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat() if self.date else None,
            "entry": self.entry.to_dict() if self.entry else None,
            "mood": self.check_in.to_dict() if self.check_in else None,
            "emoji": mood_emoji(self.check_in.mood) if self.check_in else None,
            "is_today": self.is_today,
        }


@dataclass
class WeekDay:
    label: str
    date: date
    mood: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.label,
            "date": self.date.isoformat(),
            "mood": self.mood,
            "emoji": mood_emoji(self.mood) if self.mood else None,
        }


@dataclass
class TrendPoint:
    label: str
    date: date
    score: Optional[int] = None  # None is a gap, not zero

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        d["score_label"] = score_label(self.score)
        return d


@dataclass(frozen=True)
class Insight:
    icon: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class DistributionChart:
    labels: List[str] = field(default_factory=list)
    data: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
