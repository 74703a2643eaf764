from datetime import date, datetime, timezone

import pytest

from agents.types import User
from storage.achievements import ACHIEVEMENTS_KEY, AchievementBook
from storage.auth_cache import USER_KEY, AuthSessionCache
from storage.kv import MemoryKeyValueStore
from storage.preferences import Preferences
from storage.streak import StreakTracker


def test_streak_rules():
    streak = StreakTracker(MemoryKeyValueStore())
    assert streak.current() == 0
    assert streak.record_activity(date(2026, 1, 1)) == 1
    assert streak.record_activity(date(2026, 1, 1)) == 1
    assert streak.record_activity(date(2026, 1, 2)) == 2
    assert streak.record_activity(date(2026, 1, 5)) == 1
    assert streak.last_activity() == date(2026, 1, 5)


def test_achievements_unlock_once():
    store = MemoryKeyValueStore()
    book = AchievementBook(store)
    first = datetime(2026, 1, 1, tzinfo=timezone.utc)
    later = datetime(2026, 2, 1, tzinfo=timezone.utc)

    assert book.check(total_interviews=1, highest_score=85, streak=1, at=first) == ["first-interview", "score-80"]
    assert book.check(total_interviews=2, highest_score=91, streak=7, at=later) == ["score-90", "streak-7"]
    assert book.check(total_interviews=2, highest_score=91, streak=7, at=later) == []

    stamps = {item.id: item.unlocked_at for item in book.all()}
    assert stamps["first-interview"] == first.isoformat()
    assert stamps["interviews-10"] is None
    assert store.read(ACHIEVEMENTS_KEY) is not None


def test_auth_session_cache():
    store = MemoryKeyValueStore()
    cache = AuthSessionCache(store)
    assert cache.load() is None
    assert cache.update(goals="x") is None

    cache.store(User(name="Ada", email="ada@example.dev"))
    assert cache.load().email == "ada@example.dev"
    assert cache.update(goals="Staff engineer").goals == "Staff engineer"

    cache.clear()
    assert cache.load() is None

    store.write(USER_KEY, b'{"email": "nameless@example.dev"}')
    assert cache.load() is None


def test_preferences():
    prefs = Preferences(MemoryKeyValueStore())
    assert prefs.toggle_bookmark(3) == [3]
    assert prefs.is_bookmarked(3)
    assert prefs.toggle_bookmark(3) == []
    assert prefs.theme() == "light"
    prefs.set_theme("dark")
    assert prefs.theme() == "dark"
    with pytest.raises(ValueError):
        prefs.set_theme("sepia")
