import json
from datetime import datetime, timezone

from storage.history import HISTORY_KEY, INITIALIZED_KEY, HistoryStore, InterviewRecord
from storage.kv import MemoryKeyValueStore

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FailingWrites(MemoryKeyValueStore):
    def write(self, key, value):
        raise OSError("read-only")


def _history(store=None):
    return HistoryStore(store if store is not None else MemoryKeyValueStore(), now=lambda: NOW)


def _record(score=77):
    return InterviewRecord(id="r1", type="HR", date=NOW.isoformat(), score=score, feedback=["Q1: 77% - Good"])


def test_first_read_seeds_sample_history_once():
    store = MemoryKeyValueStore()
    history = _history(store)

    seeded = history.read()
    assert [record.score for record in seeded] == [50, 62, 68, 75, 72, 80, 92]
    assert seeded[-1].date.startswith("2026-03-09")

    store.delete(HISTORY_KEY)
    assert history.read() == []


def test_append_then_read_returns_record_first():
    history = _history()
    before = history.read()
    record = _record()

    history.append(record)

    after = history.read()
    assert after[0] == record
    assert len(after) == len(before) + 1


def test_corrupt_history_is_discarded():
    store = MemoryKeyValueStore({HISTORY_KEY: b"{oops", INITIALIZED_KEY: b"true"})
    assert _history(store).read() == []
    assert store.read(HISTORY_KEY) is None

    store = MemoryKeyValueStore({HISTORY_KEY: b'{"not": "a list"}'})
    assert len(_history(store).read()) == 7


def test_entries_without_numeric_score_are_filtered():
    entries = [
        {"id": "a", "type": "HR", "date": "2026-01-01", "score": "high", "feedback": []},
        {"id": "b", "type": "HR", "date": "2026-01-01", "score": True, "feedback": []},
        {"id": "c", "type": "Technical", "date": "2026-01-02", "score": 64, "feedback": []},
    ]
    store = MemoryKeyValueStore({HISTORY_KEY: json.dumps(entries).encode()})
    assert [record.id for record in _history(store).read()] == ["c"]


def test_storage_failures_are_not_raised():
    history = _history(FailingWrites())
    updated = history.append(_record())
    assert updated[0].id == "r1"


def test_append_keeps_legacy_entries_untouched():
    legacy = [
        {"id": "old-1", "type": "Technical", "date": "2025-12-01", "score": 72.5, "feedback": []},
        {"id": 7, "type": "Sales", "date": "2025-11-20", "score": 60, "feedback": ["Q1: 60% - Fine"]},
    ]
    store = MemoryKeyValueStore({HISTORY_KEY: json.dumps(legacy).encode(), INITIALIZED_KEY: b"true"})
    history = _history(store)

    read_back = history.read()
    assert [(record.id, record.type, record.score) for record in read_back] == [("old-1", "Technical", 72.5), ("7", "Sales", 60)]

    history.append(_record())

    stored = json.loads(store.read(HISTORY_KEY))
    assert len(stored) == len(legacy) + 1
    assert stored[0]["id"] == "r1"
    assert stored[1:] == legacy
