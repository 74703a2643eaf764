from __future__ import annotations  # Achievement unlocks

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ValidationError

from .documents import load_document, save_document
from .kv import KeyValueStore

ACHIEVEMENTS_KEY = "prepmaster_achievements"


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    unlocked_at: Optional[str] = None


CATALOGUE = (
    Achievement(id="first-interview", title="First Steps", description="Completed your first interview", icon="🎯"),
    Achievement(id="score-80", title="High Performer", description="Scored 80% or higher in a practice test", icon="⭐"),
    Achievement(id="score-90", title="Expert Level", description="Scored 90% or higher in a practice test", icon="🏆"),
    Achievement(id="streak-7", title="Week Warrior", description="Maintained a 7-day streak", icon="🔥"),
    Achievement(id="streak-30", title="Month Master", description="Maintained a 30-day streak", icon="💪"),
    Achievement(id="interviews-10", title="Dedicated", description="Completed 10 interviews", icon="📚"),
)


class AchievementBook:  # Persisted unlock state for the fixed catalogue
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def all(self) -> List[Achievement]:
        stored: Dict[str, Optional[str]] = {}
        raw = load_document(self._store, ACHIEVEMENTS_KEY, default=[])
        for entry in raw if isinstance(raw, list) else []:
            try:
                item = Achievement.model_validate(entry)
            except ValidationError:
                continue
            stored[item.id] = item.unlocked_at
        return [item.model_copy(update={"unlocked_at": stored.get(item.id)}) for item in CATALOGUE]

    def unlocked(self) -> List[str]:
        return [item.id for item in self.all() if item.unlocked_at]

    def unlock(self, achievement_id: str, at: datetime) -> bool:
        """Stamp ``achievement_id`` once; returns True only on the first unlock."""

        items = self.all()
        changed = False
        for index, item in enumerate(items):
            if item.id == achievement_id and not item.unlocked_at:
                items[index] = item.model_copy(update={"unlocked_at": at.isoformat()})
                changed = True
        if changed:
            save_document(self._store, ACHIEVEMENTS_KEY, [item.model_dump() for item in items])
        return changed

    def check(self, *, total_interviews: int, highest_score: int, streak: int, at: datetime) -> List[str]:
        """Unlock every achievement the stats qualify for and return the new ids."""

        earned: List[str] = []
        if total_interviews >= 1:
            earned.append("first-interview")
        if highest_score >= 80:
            earned.append("score-80")
        if highest_score >= 90:
            earned.append("score-90")
        if streak >= 7:
            earned.append("streak-7")
        if streak >= 30:
            earned.append("streak-30")
        if total_interviews >= 10:
            earned.append("interviews-10")
        return [achievement_id for achievement_id in earned if self.unlock(achievement_id, at)]


__all__ = ["Achievement", "AchievementBook", "CATALOGUE", "ACHIEVEMENTS_KEY"]
