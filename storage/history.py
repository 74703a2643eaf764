from __future__ import annotations  # Append-only interview history over a key-value store

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .documents import drop_document, is_corrupt, load_document, load_document_or_corrupt, save_document
from .kv import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "prepai_history"
INITIALIZED_KEY = "prepai_initialized"


class InterviewRecord(BaseModel):  # One completed session as kept in history
    id: str
    type: str
    date: str = ""
    score: Union[int, float]
    feedback: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _numeric_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


_SAMPLE = (
    ("1", "Technical", 7, 50, (
        "Work on explaining technical concepts more clearly.",
        "Practice coding problems on whiteboard.",
        "Improve time management during technical discussions.",
    )),
    ("2", "HR", 6, 62, (
        "Connect answers back to company mission.",
        "Share concise metrics to quantify achievements.",
        "Balance humility with confidence.",
    )),
    ("3", "Behavioral", 5, 68, (
        "Emphasize collaboration and cross-team communication.",
        "Reflect on lessons learned to show growth mindset.",
        "Detail the decision-making process.",
    )),
    ("4", "Technical", 4, 75, (
        "Good technical knowledge demonstrated.",
        "Could improve explanation clarity.",
        "Strong problem-solving approach.",
    )),
    ("5", "HR", 3, 72, (
        "Well-structured answers using STAR method.",
        "Good cultural fit demonstrated.",
        "Could add more specific examples.",
    )),
    ("6", "Behavioral", 2, 80, (
        "Excellent storytelling with clear structure.",
        "Strong examples of leadership.",
        "Good reflection on challenges faced.",
    )),
    ("7", "Technical", 1, 92, (
        "Outstanding technical depth and clarity.",
        "Excellent problem-solving methodology.",
        "Great communication of complex concepts.",
    )),
)


def sample_history(now: datetime) -> List[InterviewRecord]:
    """Demo records dated one to seven days before ``now``."""

    return [
        InterviewRecord(
            id=rid,
            type=kind,
            date=(now - timedelta(days=days_ago)).isoformat(),
            score=score,
            feedback=list(feedback),
        )
        for rid, kind, days_ago, score, feedback in _SAMPLE
    ]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _has_numeric_score(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    score = item.get("score")
    return isinstance(score, (int, float)) and not isinstance(score, bool)


class HistoryStore:  # Newest-first interview history
    def __init__(self, store: KeyValueStore, *, now: Optional[Callable[[], datetime]] = None) -> None:
        self._store = store
        self._now = now or _utcnow

    def read(self) -> List[InterviewRecord]:
        """Return stored records; seeds the sample history on the very first read."""

        return self._records(self._entries())

    def save(self, records: List[InterviewRecord]) -> bool:
        return save_document(self._store, HISTORY_KEY, [record.model_dump() for record in records])

    def append(self, record: InterviewRecord) -> List[InterviewRecord]:
        """Prepend ``record``; stored entries are written back exactly as they were read."""

        entries = [record.model_dump(), *self._entries()]
        save_document(self._store, HISTORY_KEY, entries)
        return self._records(entries)

    def _entries(self) -> List[dict]:
        present, value = load_document_or_corrupt(self._store, HISTORY_KEY)
        if present and not is_corrupt(value) and isinstance(value, list):
            return [item for item in value if _has_numeric_score(item)]
        if present:
            logger.warning("Discarding unreadable history under %s", HISTORY_KEY)
            drop_document(self._store, HISTORY_KEY)

        if not load_document(self._store, INITIALIZED_KEY, default=False):
            seeded = sample_history(self._now())
            self.save(seeded)
            save_document(self._store, INITIALIZED_KEY, True)
            return [record.model_dump() for record in seeded]
        return []

    @staticmethod
    def _records(entries: List[dict]) -> List[InterviewRecord]:
        records: List[InterviewRecord] = []
        for entry in entries:
            try:
                records.append(InterviewRecord.model_validate(entry))
            except ValidationError:
                logger.debug("Skipping malformed history entry id=%s", entry.get("id"))
        return records


__all__ = ["HistoryStore", "InterviewRecord", "sample_history", "HISTORY_KEY", "INITIALIZED_KEY"]
