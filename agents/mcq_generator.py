"""Multiple-choice practice question generation."""
from __future__ import annotations

import textwrap
from typing import Any, List, Optional

from agents.common import as_records, fresh_id, number_or, string_list, text_or
from agents.types import MCQQuestion
from config import ProviderRoute
from errors import UpstreamFormatError
from llm_gateway import HttpClient, extract_json, generate


def build_prompt(topic: str, difficulty: str, count: int) -> str:
    return textwrap.dedent(
        f"""\
        You are an expert quiz creator. Generate {count} multiple-choice questions (MCQ) for practice.

        Topic: {topic}
        Difficulty: {difficulty}

        Generate high-quality MCQ questions with:
        1. Clear, unambiguous question text
        2. 4 answer options (A, B, C, D)
        3. Exactly ONE correct answer
        4. Detailed explanation for the correct answer
        5. Brief explanation for why other options are incorrect

        Return ONLY a valid JSON array (no markdown, no code blocks):
        [
          {{
            "id": "mcq-1",
            "question": "Question text here?",
            "options": ["Option A", "Option B", "Option C", "Option D"],
            "correct": 0,
            "explanation": "Detailed explanation of why this is correct and why others are wrong.",
            "topic": "{topic}",
            "difficulty": "{difficulty}"
          }}
        ]"""
    )


def coerce_mcq(raw: dict, index: int, topic: str, difficulty: str) -> Optional[MCQQuestion]:
    """Back-fill one MCQ; entries without text or with fewer than two options are dropped."""

    text = text_or(raw.get("question"), "")
    options = string_list(raw.get("options"))
    if not text or len(options) < 2:
        return None
    correct = number_or(raw.get("correct"), 0.0)
    index_ok = correct is not None and float(correct).is_integer() and 0 <= int(correct) < len(options)
    return MCQQuestion(
        id=text_or(str(raw["id"]) if raw.get("id") is not None else None, fresh_id("mcq", index)),
        question=text,
        options=options,
        correct=int(correct) if index_ok else 0,
        explanation=text_or(raw.get("explanation"), ""),
        topic=text_or(raw.get("topic"), topic),
        difficulty=text_or(raw.get("difficulty"), difficulty),
    )


def generate_mcq_questions(
    topic: str,
    difficulty: str,
    count: int,
    *,
    route: ProviderRoute,
    client: Optional[HttpClient] = None,
) -> List[MCQQuestion]:
    text = generate(build_prompt(topic, difficulty, count), route=route, client=client)
    questions: List[MCQQuestion] = []
    for index, raw in enumerate(as_records(extract_json(text, expect="array"))):
        mcq = coerce_mcq(raw, index, topic, difficulty)
        if mcq is not None:
            questions.append(mcq)
    if not questions:
        raise UpstreamFormatError("AI generated no usable MCQ questions")
    return questions[:count]


__all__ = ["generate_mcq_questions", "coerce_mcq", "build_prompt"]
