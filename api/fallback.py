"""Static fallback data served when the generation provider is unavailable."""
from __future__ import annotations

from typing import Any, Dict, List

from agents.mcq_generator import coerce_mcq
from agents.question_generator import coerce_question
from storage.json_files import INTERVIEW_BANK_FILE, MCQ_BANK_FILE, JsonDataStore

UNCONFIGURED_MESSAGE = "Using static data. Configure GEMINI_API_KEY for AI-generated questions."
UNSCORED_SUGGESTION = "Configure the AI service or try again later for detailed feedback"


def interview_questions(store: JsonDataStore, interview_type: str, difficulty: str, count: int) -> List[Dict[str, Any]]:
    """Bank questions of ``interview_type``, exact difficulty first, at most ``count``.

    Raises StorageError when the bank itself cannot be read.
    """

    bank = [entry for entry in store.load(INTERVIEW_BANK_FILE) if isinstance(entry, dict)]
    matching = [entry for entry in bank if entry.get("type") == interview_type]
    matching.sort(key=lambda entry: entry.get("difficulty") != difficulty)
    seen: set = set()
    return [
        coerce_question(entry, index, interview_type, difficulty, seen).to_wire()
        for index, entry in enumerate(matching[:count])
    ]


def mcq_questions(store: JsonDataStore, topic: str, difficulty: str, count: int) -> List[Dict[str, Any]]:
    bank = [entry for entry in store.load(MCQ_BANK_FILE) if isinstance(entry, dict)]
    selected: List[Dict[str, Any]] = []
    for index, entry in enumerate(bank):
        if entry.get("difficulty") != difficulty:
            continue
        mcq = coerce_mcq(entry, index, topic, difficulty)
        if mcq is not None:
            selected.append(mcq.to_wire())
        if len(selected) >= count:
            break
    return selected


__all__ = ["interview_questions", "mcq_questions", "UNCONFIGURED_MESSAGE", "UNSCORED_SUGGESTION"]
