"""Interview question generation through the provider."""
from __future__ import annotations

import logging
import textwrap
from typing import Any, List, Optional

from agents.common import as_records, fresh_id, number_or, text_or
from agents.types import DIFFICULTIES, INTERVIEW_TYPES, Question, UserProfile
from config import ProviderRoute
from errors import UpstreamFormatError
from llm_gateway import HttpClient, extract_json, generate

logger = logging.getLogger(__name__)

DEFAULT_HINT = "Think carefully about your answer."
DEFAULT_ESTIMATED_TIME = 300


def validate_request(interview_type: Any, difficulty: Any, count: Any) -> None:
    if interview_type not in INTERVIEW_TYPES:
        raise ValueError(f"Must be one of: Technical, HR, or Behavioral. Received: {interview_type}")
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"Must be one of: Easy, Medium, or Hard. Received: {difficulty}")
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"Count must be at least 1. Received count: {count}")


def build_prompt(interview_type: str, difficulty: str, count: int, profile: UserProfile) -> str:
    skills = ", ".join(profile.skills) or "general software development"
    goals = profile.goals or "Software engineering role"
    return textwrap.dedent(
        f"""\
        You are an expert interview coach. Generate {count} {difficulty.lower()} {interview_type} interview questions.

        User Profile:
        - Skills: {skills}
        - Goals: {goals}

        Generate questions that are:
        1. Relevant to {interview_type} interviews
        2. Appropriate for {difficulty} difficulty level
        3. Practical and realistic
        4. Specific enough to test knowledge but open-ended for discussion

        IMPORTANT: Return ONLY a valid JSON array with this exact format (no markdown, no code blocks, no explanation):
        [
          {{
            "id": "unique-id-1",
            "question": "Question text here",
            "hint": "Helpful hint for the question",
            "type": "{interview_type}",
            "difficulty": "{difficulty}",
            "estimatedTime": 300
          }}
        ]"""
    )


def coerce_question(raw: dict, index: int, interview_type: str, difficulty: str, seen: set) -> Question:
    """Back-fill a provider question so every field is present and typed."""

    qid = text_or(raw.get("id"), "")
    if not qid or qid in seen:
        qid = fresh_id("q", index)
    seen.add(qid)
    seconds = number_or(raw.get("estimatedTime"))
    kind = raw.get("type") if raw.get("type") in INTERVIEW_TYPES else interview_type
    level = raw.get("difficulty") if raw.get("difficulty") in DIFFICULTIES else difficulty
    return Question(
        id=qid,
        question=text_or(raw.get("question"), "Question text missing"),
        hint=text_or(raw.get("hint"), DEFAULT_HINT),
        type=kind,
        difficulty=level,
        estimated_time=int(seconds) if seconds and seconds >= 1 else DEFAULT_ESTIMATED_TIME,
    )


def generate_questions(
    interview_type: str,
    difficulty: str,
    count: int,
    profile: Optional[UserProfile] = None,
    *,
    route: ProviderRoute,
    client: Optional[HttpClient] = None,
) -> List[Question]:
    """Generate ``count`` interview questions for the given configuration."""

    validate_request(interview_type, difficulty, count)
    prompt = build_prompt(interview_type, difficulty, count, profile or UserProfile())
    text = generate(prompt, route=route, client=client)
    records = as_records(extract_json(text, expect="array"))
    if not records:
        raise UpstreamFormatError("AI generated empty question list")
    seen: set = set()
    questions = [
        coerce_question(raw, index, interview_type, difficulty, seen)
        for index, raw in enumerate(records[:count])
    ]
    logger.info("Generated %d %s/%s questions", len(questions), interview_type, difficulty)
    return questions


__all__ = ["generate_questions", "build_prompt", "coerce_question", "validate_request"]
