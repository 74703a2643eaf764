import json

import pytest

from agents.question_generator import DEFAULT_HINT, generate_questions
from agents.types import UserProfile
from conftest import FakeHttpClient, gemini_reply
from errors import UpstreamFormatError


def test_questions_are_backfilled_and_truncated(route):
    raw = [
        {"id": "a", "question": "Explain REST.", "estimatedTime": "abc"},
        {"id": "a", "question": "Explain gRPC.", "hint": "Think HTTP/2", "type": "Bogus", "estimatedTime": 120},
        {"id": "c", "question": "Explain GraphQL."},
    ]
    client = FakeHttpClient(gemini_reply("```json\n" + json.dumps(raw) + "\n```"))
    profile = UserProfile(skills=["Python", "SQL"], goals="Backend role")

    questions = generate_questions("Technical", "Easy", 2, profile, route=route, client=client)

    assert len(questions) == 2
    first, second = questions
    assert first.id == "a"
    assert first.hint == DEFAULT_HINT
    assert first.estimated_time == 300
    assert second.id != "a" and second.id.startswith("q-2-")
    assert second.type == "Technical"
    assert second.estimated_time == 120
    prompt = client.calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert "Python, SQL" in prompt
    assert "Backend role" in prompt


def test_missing_question_text_gets_placeholder(route):
    client = FakeHttpClient(gemini_reply('[{"hint": "h"}]'))
    (question,) = generate_questions("HR", "Hard", 1, route=route, client=client)
    assert question.question == "Question text missing"
    assert question.type == "HR" and question.difficulty == "Hard"


def test_empty_list_is_a_format_error(route):
    with pytest.raises(UpstreamFormatError):
        generate_questions("HR", "Easy", 3, route=route, client=FakeHttpClient(gemini_reply("[]")))


@pytest.mark.parametrize(
    "interview_type,difficulty,count",
    [("Tech", "Easy", 1), ("HR", "Trivial", 1), ("HR", "Easy", 0), ("HR", "Easy", True)],
)
def test_invalid_requests_are_rejected_before_calling(route, interview_type, difficulty, count):
    client = FakeHttpClient()
    with pytest.raises(ValueError):
        generate_questions(interview_type, difficulty, count, route=route, client=client)
    assert client.calls == []
