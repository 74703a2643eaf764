import pytest

from agents.answer_evaluator import DEFAULT_FEEDBACK, PLACEHOLDER_SCORE, coerce_evaluation, evaluate_answer, placeholder_evaluation
from conftest import FakeHttpClient, gemini_reply


def test_evaluation_parsed_from_fenced_object(route):
    reply = '```json\n{"score": 82, "strengths": ["Clear"], "feedback": "Solid answer.", "improvementAreas": ["Depth"]}\n```'
    client = FakeHttpClient(gemini_reply(reply))

    evaluation = evaluate_answer("What is a thread?", "A unit of execution.", {"type": "Technical"}, route=route, client=client)

    assert evaluation.score == 82
    assert evaluation.strengths == ["Clear"]
    assert evaluation.weaknesses == []
    assert evaluation.improvement_areas == ["Depth"]
    prompt = client.calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert "Question Type: Technical" in prompt
    assert "Difficulty: Medium" in prompt


@pytest.mark.parametrize(
    "raw,expected",
    [({"score": 150}, 100), ({"score": -5}, 0), ({"score": "85%"}, 85), ({"score": "n/a"}, 0), ({}, 0), ([], 0)],
)
def test_score_is_always_clamped(raw, expected):
    evaluation = coerce_evaluation(raw)
    assert evaluation.score == expected
    assert 0 <= evaluation.score <= 100


def test_missing_feedback_gets_default():
    evaluation = coerce_evaluation({"score": 50, "strengths": ["ok", 3, ""]})
    assert evaluation.feedback == DEFAULT_FEEDBACK
    assert evaluation.strengths == ["ok"]


def test_placeholder_differs_only_in_suggestion():
    offline = placeholder_evaluation("Please check your internet connection")
    unconfigured = placeholder_evaluation("Configure the AI service")

    assert offline.score == unconfigured.score == PLACEHOLDER_SCORE
    assert offline.model_dump(exclude={"suggestions"}) == unconfigured.model_dump(exclude={"suggestions"})
    assert offline.suggestions == ["Please check your internet connection"]
