"""Daily practice streak counter."""
from __future__ import annotations

from datetime import date
from typing import Optional

from .documents import load_document, save_document
from .kv import KeyValueStore

STREAK_KEY = "prepmaster_streak"
LAST_ACTIVITY_KEY = "prepmaster_last_activity"


class StreakTracker:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def current(self) -> int:
        value = load_document(self._store, STREAK_KEY, default=0)
        return value if isinstance(value, int) and not isinstance(value, bool) and value > 0 else 0

    def last_activity(self) -> Optional[date]:
        raw = load_document(self._store, LAST_ACTIVITY_KEY)
        if not isinstance(raw, str):
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return None

    def record_activity(self, today: date) -> int:
        """Count ``today`` towards the streak and return the new streak length.

        Same day keeps the count, the next calendar day extends it, and any
        longer gap (or no previous activity) restarts it at one.
        """

        last = self.last_activity()
        streak = self.current()
        if last is not None and streak > 0:
            gap = (today - last).days
            if gap <= 0:
                return streak
            streak = streak + 1 if gap == 1 else 1
        else:
            streak = 1
        save_document(self._store, STREAK_KEY, streak)
        save_document(self._store, LAST_ACTIVITY_KEY, today.isoformat())
        return streak


__all__ = ["StreakTracker", "STREAK_KEY", "LAST_ACTIVITY_KEY"]
