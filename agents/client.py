from __future__ import annotations  # AI proxy client bundling the provider operations

from typing import Any, Dict, List, Optional, Sequence

from config import ProviderRoute
from llm_gateway import HttpClient

from . import answer_evaluator, learning_path, mcq_generator, question_generator, study_buddy
from .types import Evaluation, LearningPath, MCQQuestion, Question, UserProfile


class AiProxyClient:  # Provider operations bound to one explicit route
    def __init__(self, route: ProviderRoute, *, http_client: Optional[HttpClient] = None) -> None:
        self._route = route
        self._http = http_client

    @property
    def route(self) -> ProviderRoute:
        return self._route

    @property
    def configured(self) -> bool:
        return self._route.configured

    def generate_questions(
        self,
        interview_type: str,
        difficulty: str,
        count: int,
        profile: Optional[UserProfile] = None,
    ) -> List[Question]:
        return question_generator.generate_questions(
            interview_type, difficulty, count, profile, route=self._route, client=self._http
        )

    def evaluate_answer(self, question: str, answer: str, context: Optional[Dict[str, Any]] = None) -> Evaluation:
        return answer_evaluator.evaluate_answer(question, answer, context, route=self._route, client=self._http)

    def generate_learning_path(
        self, user_stats: Optional[Dict[str, Any]] = None, weaknesses: Optional[Sequence[str]] = None
    ) -> LearningPath:
        return learning_path.generate_learning_path(user_stats, weaknesses, route=self._route, client=self._http)

    def generate_mcq_questions(self, topic: str, difficulty: str, count: int) -> List[MCQQuestion]:
        return mcq_generator.generate_mcq_questions(topic, difficulty, count, route=self._route, client=self._http)

    def chat(self, user_message: str, history: Optional[Sequence[Any]] = None) -> str:
        return study_buddy.chat(user_message, history, route=self._route, client=self._http)


__all__ = ["AiProxyClient"]
