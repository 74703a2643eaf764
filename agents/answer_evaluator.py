"""LLM-backed answer evaluator with score clamping."""
from __future__ import annotations

import textwrap
from typing import Any, Dict, Optional

from agents.common import clamp, number_or, string_list, text_or
from config import ProviderRoute
from llm_gateway import HttpClient, extract_json, generate

from .types import Evaluation

DEFAULT_FEEDBACK = "No feedback provided."
PLACEHOLDER_SCORE = 70


def build_prompt(question: str, answer: str, context: Dict[str, Any]) -> str:
    return textwrap.dedent(
        f"""\
        You are an expert interview evaluator. Evaluate the following interview answer.

        Question: "{question}"
        Question Type: {context.get("type") or "General"}
        Difficulty: {context.get("difficulty") or "Medium"}

        Answer: "{answer}"

        Evaluate this answer and provide a comprehensive assessment. Return ONLY a valid JSON object (no markdown, no code blocks) with this exact structure:
        {{
          "score": 85,
          "strengths": ["Strength 1", "Strength 2", "Strength 3"],
          "weaknesses": ["Weakness 1", "Weakness 2"],
          "suggestions": ["Suggestion 1", "Suggestion 2", "Suggestion 3"],
          "feedback": "Overall detailed feedback in 2-3 sentences explaining the score and key points.",
          "improvementAreas": ["Area 1", "Area 2"]
        }}

        Scoring Guidelines:
        - 90-100: Excellent answer, comprehensive and well-structured
        - 75-89: Good answer with minor gaps
        - 60-74: Acceptable but needs improvement
        - 40-59: Below average, significant gaps
        - 0-39: Poor answer, lacks understanding

        Be constructive and specific in your feedback."""
    )


def coerce_evaluation(raw: Any) -> Evaluation:
    """Clamp the score to 0..100 and default every missing field."""

    data = raw if isinstance(raw, dict) else {}
    score = number_or(data.get("score"), 0.0)
    return Evaluation(
        score=clamp(score, 0, 100),
        strengths=string_list(data.get("strengths")),
        weaknesses=string_list(data.get("weaknesses")),
        suggestions=string_list(data.get("suggestions")),
        feedback=text_or(data.get("feedback"), DEFAULT_FEEDBACK),
        improvement_areas=string_list(data.get("improvementAreas")),
    )


def placeholder_evaluation(suggestion: str) -> Evaluation:
    """Neutral stand-in used when an answer could not be scored."""

    return Evaluation(
        score=PLACEHOLDER_SCORE,
        strengths=["Answer provided"],
        weaknesses=["Could not evaluate"],
        suggestions=[suggestion],
        feedback="Evaluation unavailable",
    )


def evaluate_answer(
    question: str,
    answer: str,
    context: Optional[Dict[str, Any]] = None,
    *,
    route: ProviderRoute,
    client: Optional[HttpClient] = None,
) -> Evaluation:
    """Score a single answer; one provider call, no retries."""

    prompt = build_prompt(question, answer, context or {})
    text = generate(prompt, route=route, client=client)
    return coerce_evaluation(extract_json(text, expect="object"))


__all__ = ["evaluate_answer", "coerce_evaluation", "build_prompt", "placeholder_evaluation", "PLACEHOLDER_SCORE"]
