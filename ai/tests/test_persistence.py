import json
from datetime import datetime, timezone

from conftest import NEW_YORK, TOKYO
from mood_engine.persistence import (DARK_MODE_KEY, ENTRIES_KEY, MOODS_KEY, FileKeyValueStorage,
                                     load_state, save_state)
from mood_engine.store import JournalState


def _storage(tmp_path, values=None):
    path = tmp_path / "journal.json"
    if values is not None:
        path.write_text(json.dumps(values), encoding="utf-8")
    return FileKeyValueStorage(str(path))


def test_missing_file_loads_empty_defaults(tmp_path):
    s = load_state(_storage(tmp_path))
    assert s.entries.list_entries() == []
    assert s.moods.list_check_ins() == []
    assert s.dark_mode is False


def test_save_then_load_keeps_order_and_fields(tmp_path, clock):
    storage = _storage(tmp_path)
    state = JournalState.create(tz=TOKYO, clock=clock)
    state.entries.add_entry("first", mood="calm", tags=["peaceful"])
    clock.advance(days=1)
    state.entries.add_entry("second", tags=["productive", "challenging"])
    state.dark_mode = True
    save_state(storage, state)

    loaded = load_state(storage, tz=TOKYO, clock=clock)
    assert [e.text for e in loaded.entries.list_entries()] == ["second", "first"]
    assert loaded.entries.list_entries() == state.entries.list_entries()
    assert loaded.moods.list_check_ins() == state.moods.list_check_ins()
    assert loaded.dark_mode is True


def test_stored_layout_uses_fixed_keys(tmp_path, clock):
    storage = _storage(tmp_path)
    state = JournalState.create(tz=TOKYO, clock=clock)
    state.entries.add_entry("hello", mood="happy")
    save_state(storage, state)

    raw = json.loads((tmp_path / "journal.json").read_text(encoding="utf-8"))
    assert set(raw) == {ENTRIES_KEY, MOODS_KEY, DARK_MODE_KEY}
    entries = json.loads(raw[ENTRIES_KEY])
    assert entries[0]["date"] == "2026-10-19T00:00:00.000Z"
    assert entries[0]["localDate"] == "Monday, October 19, 2026 at 09:00 AM"
    assert json.loads(raw[DARK_MODE_KEY]) is False


def test_corrupt_value_only_drops_that_key(tmp_path):
    storage = _storage(tmp_path, {
        ENTRIES_KEY: json.dumps([{"id": 1, "date": "2026-10-18T10:00:00.000Z", "text": "kept", "tags": []}]),
        MOODS_KEY: "{not json",
        DARK_MODE_KEY: "true",
    })
    s = load_state(storage)
    assert [e.text for e in s.entries.list_entries()] == ["kept"]
    assert s.moods.list_check_ins() == []
    assert s.dark_mode is True


def test_wrong_shapes_fall_back_to_defaults(tmp_path):
    storage = _storage(tmp_path, {
        ENTRIES_KEY: json.dumps({"id": 1}),
        MOODS_KEY: json.dumps("sad"),
        DARK_MODE_KEY: json.dumps("yes"),
    })
    s = load_state(storage)
    assert len(s.entries) == 0
    assert len(s.moods) == 0
    assert s.dark_mode is False


def test_bad_rows_are_skipped(tmp_path):
    storage = _storage(tmp_path, {
        ENTRIES_KEY: json.dumps([
            {"id": 2, "date": "2026-10-18T10:00:00Z", "text": "ok", "mood": "nope", "tags": ["grateful", "x"]},
            {"id": 1, "date": "not a date", "text": "bad"},
            {"id": 3, "date": "2026-10-18T10:00:00Z", "text": "   "},
            "garbage",
        ]),
        MOODS_KEY: json.dumps([
            {"mood": "happy", "date": "2026-10-18T10:00:00Z"},
            {"mood": "ecstatic", "date": "2026-10-17T10:00:00Z"},
            {"date": "2026-10-16T10:00:00Z"},
        ]),
    })
    s = load_state(storage)
    entries = s.entries.list_entries()
    assert len(entries) == 1
    assert entries[0].mood is None
    assert entries[0].tags == ("grateful",)
    assert [c.mood for c in s.moods.list_check_ins()] == ["happy"]


def test_unreadable_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "journal.json"
    path.write_text("[1, 2", encoding="utf-8")
    s = load_state(FileKeyValueStorage(str(path)))
    assert len(s.entries) == 0


def test_new_ids_continue_after_loaded_ones(tmp_path, clock):
    far_future_id = 10 ** 15
    storage = _storage(tmp_path, {
        ENTRIES_KEY: json.dumps([{"id": far_future_id, "date": "2026-10-18T10:00:00Z", "text": "old"}]),
    })
    s = load_state(storage, clock=clock)
    e = s.entries.add_entry("new")
    assert e.id == far_future_id + 1


def test_same_local_day_check_ins_keep_the_newest(tmp_path, clock):
    # both rows fall on 2026-10-18 in Tokyo; the list is newest first
    storage = _storage(tmp_path, {
        MOODS_KEY: json.dumps([
            {"mood": "happy", "date": "2026-10-18T03:00:00.000Z"},
            {"mood": "sad", "date": "2026-10-18T01:00:00.000Z"},
            {"mood": "calm", "date": "2026-10-17T01:00:00.000Z"},
        ]),
    })
    s = load_state(storage, tz=TOKYO, clock=clock)
    assert [c.mood for c in s.moods.list_check_ins()] == ["happy", "calm"]

    s.moods.save_mood("anxious", at=datetime(2026, 10, 18, 5, 0, tzinfo=timezone.utc))
    assert [c.mood for c in s.moods.list_check_ins()] == ["anxious", "calm"]


def test_same_day_depends_on_the_observer_timezone(tmp_path):
    rows = [
        {"mood": "happy", "date": "2026-10-18T16:00:00Z"},
        {"mood": "sad", "date": "2026-10-18T14:00:00Z"},
    ]
    storage = _storage(tmp_path, {MOODS_KEY: json.dumps(rows)})
    # 01:00 and 23:00 in Tokyo, both the same evening in New York
    assert len(load_state(storage, tz=TOKYO).moods) == 2
    assert len(load_state(storage, tz=NEW_YORK).moods) == 1
