import json

import httpx
import pytest

from agents.types import UserProfile
from services.gateway_client import GatewayClient, GatewayError


def _client(handler) -> GatewayClient:
    return GatewayClient("http://gateway.test/api", http=httpx.Client(transport=httpx.MockTransport(handler)))


def test_generate_questions_posts_configuration():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "success": True,
                "questions": [
                    {"id": "hr-1", "question": "Tell me about yourself.", "hint": "Be brief.", "type": "HR", "difficulty": "Easy", "estimatedTime": 120}
                ],
            },
        )

    questions = _client(handler).generate_questions("HR", "Easy", 1, UserProfile(skills=["Go"]))

    assert seen["url"] == "http://gateway.test/api/ai/interview-questions"
    assert seen["body"]["userProfile"] == {"skills": ["Go"], "goals": ""}
    assert questions[0].estimated_time == 120


def test_evaluate_answer_parses_wire_keys():
    def handler(request):
        return httpx.Response(200, json={"success": True, "evaluation": {"score": 64, "improvementAreas": ["Depth"]}})

    evaluation = _client(handler).evaluate_answer("q", "a")
    assert evaluation.score == 64
    assert evaluation.improvement_areas == ["Depth"]


def test_error_responses_prefer_details():
    def handler(request):
        return httpx.Response(400, json={"success": False, "message": "Invalid difficulty level", "details": "Must be one of: Easy"})

    with pytest.raises(GatewayError) as excinfo:
        _client(handler).generate_questions("HR", "Easy", 1)
    assert excinfo.value.message == "Must be one of: Easy"
    assert excinfo.value.status == 400


def test_success_false_is_an_error():
    with pytest.raises(GatewayError):
        _client(lambda request: httpx.Response(200, json={"success": False, "message": "nope"})).health()


def test_api_key_errors_get_actionable_message():
    def handler(request):
        return httpx.Response(500, json={"success": False, "message": "API key authentication failed."})

    with pytest.raises(GatewayError) as excinfo:
        _client(handler).health()
    assert "check your Gemini API key" in excinfo.value.message


def test_transport_failures():
    def refused(request):
        raise httpx.ConnectError("connection refused", request=request)

    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(GatewayError) as excinfo:
        _client(refused).health()
    assert excinfo.value.message.startswith("Cannot connect to backend server")
    assert "http://gateway.test/api" in excinfo.value.message

    with pytest.raises(GatewayError) as excinfo:
        _client(slow).health()
    assert excinfo.value.message.startswith("Request timed out")


def test_non_json_body():
    with pytest.raises(GatewayError) as excinfo:
        _client(lambda request: httpx.Response(502, text="<html>Bad gateway</html>")).health()
    assert excinfo.value.message == "Unexpected response from backend server"
