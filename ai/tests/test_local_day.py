from datetime import date, datetime, timezone

from conftest import NEW_YORK, TOKYO
from mood_engine.local_day import (as_utc, format_entry_date, format_long_date, format_short_date,
                                   local_day_key, resolve_timezone, weekday_index)


def test_local_day_key_uses_observer_timezone():
    instant = datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc)
    assert local_day_key(instant, TOKYO) == (2026, 10, 19)
    assert local_day_key(instant, NEW_YORK) == (2026, 10, 18)


def test_naive_instant_is_treated_as_utc():
    assert local_day_key(datetime(2026, 10, 19, 20, 0), TOKYO) == (2026, 10, 20)


def test_plain_date_maps_to_itself():
    assert local_day_key(date(2026, 2, 28), NEW_YORK) == (2026, 2, 28)


def test_weekday_index_sunday_first():
    assert weekday_index(date(2026, 10, 18)) == 0  # Sunday
    assert weekday_index(date(2026, 10, 24)) == 6  # Saturday


def test_formatting():
    assert format_long_date(date(2026, 10, 19)) == "Monday, October 19, 2026"
    assert format_short_date(date(2026, 10, 5)) == "Oct 5"
    instant = datetime(2026, 10, 19, 4, 7, tzinfo=timezone.utc)
    assert format_entry_date(instant, TOKYO) == "Monday, October 19, 2026 at 01:07 PM"


def test_as_utc_reads_naive_values_as_utc():
    assert as_utc(datetime(2026, 10, 19, 20, 0)) == datetime(2026, 10, 19, 20, 0, tzinfo=timezone.utc)
    converted = as_utc(datetime(2026, 10, 19, 9, 0, tzinfo=TOKYO))
    assert converted.tzinfo is timezone.utc
    assert converted.hour == 0


def test_resolve_timezone():
    assert resolve_timezone("") is None
    assert resolve_timezone("Not/AZone") is None
    assert resolve_timezone("Asia/Tokyo") == TOKYO
