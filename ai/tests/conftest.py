import os
import sys
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

# Make mood_engine importable without installing
base = os.path.dirname(os.path.dirname(__file__))  # ai/
sys.path.insert(0, os.path.join(base, "services"))

from mood_engine.store import JournalState  # noqa: E402

TOKYO = ZoneInfo("Asia/Tokyo")
NEW_YORK = ZoneInfo("America/New_York")


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set_local(self, tz, *args) -> datetime:
        self.now = datetime(*args, tzinfo=tz).astimezone(timezone.utc)
        return self.now


@pytest.fixture
def clock():
    # 2026-10-19 09:00 in Tokyo (a Monday)
    return FakeClock(datetime(2026, 10, 19, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def state(clock):
    return JournalState.create(tz=TOKYO, clock=clock)
