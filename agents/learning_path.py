"""Personalised learning-path synthesis."""
from __future__ import annotations

import textwrap
from typing import Any, Dict, List, Optional, Sequence

from agents.common import fresh_id, number_or, string_list, text_or
from agents.types import LearningPath, LearningTopic
from config import ProviderRoute
from llm_gateway import HttpClient, extract_json, generate

_PRIORITIES = ("High", "Medium", "Low")


def build_prompt(user_stats: Dict[str, Any], weaknesses: Sequence[str]) -> str:
    skills = ", ".join(string_list(user_stats.get("skills"))) or "general programming"
    weak_areas = ", ".join(weaknesses) or "none identified yet"
    average = number_or(user_stats.get("averageScore"), 0.0)
    goals = text_or(user_stats.get("goals"), "Success in technical interviews")
    return textwrap.dedent(
        f"""\
        You are a career coach and learning path specialist. Create a personalized learning path for interview preparation.

        User Profile:
        - Skills: {skills}
        - Average Interview Score: {average:g}/100
        - Weak Areas: {weak_areas}
        - Goals: {goals}

        Generate a comprehensive, actionable learning path. Return ONLY a valid JSON object (no markdown, no code blocks):
        {{
          "topics": [
            {{
              "id": "topic-1",
              "name": "Topic Name",
              "priority": "High|Medium|Low",
              "description": "Why this topic is important",
              "estimatedHours": 10,
              "completed": false
            }}
          ],
          "goals": ["Goal 1", "Goal 2", "Goal 3"],
          "estimatedTimeToImprovement": "2-3 weeks",
          "recommendations": "Personalized recommendation text explaining the learning path strategy."
        }}"""
    )


def _coerce_topic(raw: Any, index: int) -> Optional[LearningTopic]:
    if not isinstance(raw, dict):
        return None
    name = text_or(raw.get("name"), "")
    if not name:
        return None
    hours = number_or(raw.get("estimatedHours"), 0.0) or 0.0
    priority = raw.get("priority") if raw.get("priority") in _PRIORITIES else "Medium"
    return LearningTopic(
        id=text_or(raw.get("id"), fresh_id("topic", index)),
        name=name,
        priority=priority,
        description=text_or(raw.get("description"), ""),
        estimated_hours=max(0.0, hours),
        completed=raw.get("completed") is True,
    )


def coerce_learning_path(raw: Any) -> LearningPath:
    data = raw if isinstance(raw, dict) else {}
    topics_raw = data.get("topics") if isinstance(data.get("topics"), list) else []
    topics: List[LearningTopic] = []
    for index, entry in enumerate(topics_raw):
        topic = _coerce_topic(entry, index)
        if topic is not None:
            topics.append(topic)
    defaults = LearningPath()
    return LearningPath(
        topics=topics,
        goals=string_list(data.get("goals")),
        estimated_time_to_improvement=text_or(
            data.get("estimatedTimeToImprovement"), defaults.estimated_time_to_improvement
        ),
        recommendations=text_or(data.get("recommendations"), defaults.recommendations),
    )


def generate_learning_path(
    user_stats: Optional[Dict[str, Any]] = None,
    weaknesses: Optional[Sequence[str]] = None,
    *,
    route: ProviderRoute,
    client: Optional[HttpClient] = None,
) -> LearningPath:
    prompt = build_prompt(user_stats or {}, list(weaknesses or []))
    text = generate(prompt, route=route, client=client)
    return coerce_learning_path(extract_json(text, expect="object"))


def default_learning_path(weaknesses: Sequence[str]) -> LearningPath:
    """Static learning path used when the provider is unavailable."""

    areas = [area for area in weaknesses if isinstance(area, str) and area.strip()][:3]
    if not areas:
        areas = ["Data Structures & Algorithms", "Behavioral storytelling (STAR)", "System Design basics"]
    topics = [
        LearningTopic(
            id=f"topic-{index + 1}",
            name=area.strip(),
            priority="High" if index == 0 else "Medium",
            description=f"Targeted practice on {area.strip()}.",
            estimated_hours=8,
        )
        for index, area in enumerate(areas)
    ]
    return LearningPath(
        topics=topics,
        goals=["Complete one mock interview per day", "Review feedback after every session"],
    )


__all__ = ["generate_learning_path", "coerce_learning_path", "default_learning_path", "build_prompt"]
