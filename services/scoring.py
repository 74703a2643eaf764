"""Aggregation of per-question evaluations into a session result."""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from pydantic import Field

from agents.types import Evaluation, WireModel

SUMMARY_LIMIT = 5


class SessionResult(WireModel):
    overall_score: int = Field(ge=0, le=100, alias="overallScore")
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    improvement_areas: List[str] = Field(default_factory=list, alias="improvementAreas")
    feedback: str = ""


def _dedup(items: Iterable[str], limit: int = SUMMARY_LIMIT) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
        if len(seen) >= limit:
            break
    return seen


def verdict(score: int) -> str:
    if score >= 80:
        return "Great job!"
    if score >= 60:
        return "Good effort!"
    return "Keep practicing!"


def summarize(evaluations: Sequence[Evaluation]) -> SessionResult:
    """Mean score rounded half up, plus the first five distinct entries of each list."""

    if not evaluations:
        raise ValueError("Cannot summarize a session without evaluations")
    mean = sum(evaluation.score for evaluation in evaluations) / len(evaluations)
    overall = math.floor(mean + 0.5)  # half rounds up
    return SessionResult(
        overall_score=overall,
        strengths=_dedup(item for evaluation in evaluations for item in evaluation.strengths),
        weaknesses=_dedup(item for evaluation in evaluations for item in evaluation.weaknesses),
        suggestions=_dedup(item for evaluation in evaluations for item in evaluation.suggestions),
        improvement_areas=_dedup(item for evaluation in evaluations for item in evaluation.improvement_areas),
        feedback=f"You scored {overall}% overall. {verdict(overall)}",
    )


def feedback_lines(evaluations: Sequence[Evaluation]) -> List[str]:
    return [f"Q{index}: {evaluation.score}% - {evaluation.feedback}" for index, evaluation in enumerate(evaluations, 1)]


__all__ = ["SessionResult", "summarize", "feedback_lines", "verdict", "SUMMARY_LIMIT"]
