from __future__ import annotations  # HTTP client used by interview sessions to reach the gateway

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from agents.types import Evaluation, LearningPath, MCQQuestion, Question, UserProfile
from errors import PrepError


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"


class GatewayError(PrepError):  # Gateway unreachable, non-2xx, or success:false
    status_code = 502

    def __init__(self, message: str, *, details: Optional[str] = None, status: Optional[int] = None) -> None:
        super().__init__(message, details=details)
        self.status = status


def _connect_message(base_url: str) -> str:
    return f"Cannot connect to backend server. Please ensure the backend is running on {base_url}"


def _actionable(message: str) -> str:
    lowered = message.lower()
    if "api key" in lowered or "authentication" in lowered:
        return (
            "API key error. Please check your Gemini API key in the backend .env file. "
            "Get your key from: https://makersuite.google.com/app/apikey"
        )
    return message


class GatewayClient:
    """Thin wrapper over the gateway routes.

    ``http`` may be any httpx-compatible client, e.g. ``fastapi.testclient.TestClient``
    with ``base_url="/api"``. When omitted an ``httpx.Client`` is created and owned here.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._http.request(method, url, json=payload)
        except httpx.TimeoutException as exc:
            raise GatewayError("Request timed out. The AI service may be slow. Please try again.") from exc
        except httpx.HTTPError as exc:
            logger.warning("Gateway transport failure url=%s: %s", url, exc)
            raise GatewayError(_connect_message(self._base_url), details=str(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise GatewayError(
                "Unexpected response from backend server",
                details=f"HTTP {response.status_code}",
                status=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise GatewayError("Unexpected response from backend server", status=response.status_code)
        if response.status_code >= 400 or not body.get("success"):
            message = body.get("details") or body.get("message") or f"Request failed with status {response.status_code}"
            raise GatewayError(_actionable(str(message)), details=body.get("details"), status=response.status_code)
        if body.get("fallback"):
            logger.info("Gateway served fallback data path=%s reason=%s", path, body.get("reason"))
        return body

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    def generate_questions(
        self,
        interview_type: str,
        difficulty: str,
        count: int,
        profile: Optional[UserProfile] = None,
    ) -> List[Question]:
        body = self._request(
            "POST",
            "/ai/interview-questions",
            {
                "type": interview_type,
                "difficulty": difficulty,
                "count": count,
                "userProfile": (profile or UserProfile()).to_wire(),
            },
        )
        try:
            return [Question.model_validate(item) for item in body.get("questions") or []]
        except PydanticValidationError as exc:
            raise GatewayError("Backend returned malformed questions", details=str(exc)) from exc

    def evaluate_answer(self, question: str, answer: str, context: Optional[Dict[str, Any]] = None) -> Evaluation:
        body = self._request(
            "POST",
            "/ai/evaluate-answer",
            {"question": question, "answer": answer, "context": context or {}},
        )
        try:
            return Evaluation.model_validate(body.get("evaluation"))
        except PydanticValidationError as exc:
            raise GatewayError("Backend returned a malformed evaluation", details=str(exc)) from exc

    def generate_learning_path(
        self, user_stats: Optional[Dict[str, Any]] = None, weaknesses: Optional[Sequence[str]] = None
    ) -> LearningPath:
        body = self._request(
            "POST",
            "/ai/learning-path",
            {"userStats": user_stats or {}, "weaknesses": list(weaknesses or [])},
        )
        try:
            return LearningPath.model_validate(body.get("learningPath"))
        except PydanticValidationError as exc:
            raise GatewayError("Backend returned a malformed learning path", details=str(exc)) from exc

    def generate_mcq_questions(self, topic: str, difficulty: str, count: int) -> List[MCQQuestion]:
        body = self._request("POST", "/ai/mcq-questions", {"topic": topic, "difficulty": difficulty, "count": count})
        try:
            return [MCQQuestion.model_validate(item) for item in body.get("questions") or []]
        except PydanticValidationError as exc:
            raise GatewayError("Backend returned malformed MCQ questions", details=str(exc)) from exc

    def chat(self, user_message: str, history: Optional[Sequence[Dict[str, str]]] = None) -> str:
        body = self._request(
            "POST",
            "/ai/chat",
            {"userMessage": user_message, "conversationHistory": list(history or [])},
        )
        return str(body.get("response") or "")


__all__ = ["GatewayClient", "GatewayError", "DEFAULT_BASE_URL"]
