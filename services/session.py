"""Interview session state machine.

A session moves ``configuring -> answering(i) -> evaluating(i) -> answering(i+1)``
and finally ``completed``. Remote calls go through :class:`GatewayClient`; the
per-question countdown is polled with :meth:`InterviewSession.tick` rather than
run on a background timer. Every remote call captures the session epoch and
question index, and a result that comes back after either has moved on is
dropped.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from agents.answer_evaluator import placeholder_evaluation
from agents.types import DIFFICULTIES, INTERVIEW_TYPES, Evaluation, Question, UserProfile
from errors import ValidationError
from observability import log_event, span
from storage.achievements import AchievementBook
from storage.history import HistoryStore, InterviewRecord
from storage.streak import StreakTracker

from .countdown import Clock, Countdown
from .gateway_client import GatewayClient, GatewayError
from .scoring import SessionResult, feedback_lines, summarize


logger = logging.getLogger(__name__)

EMPTY_ANSWER_MESSAGE = "Please enter your response before moving on."
NO_QUESTIONS_MESSAGE = "No questions were generated. Please try again."
OFFLINE_SUGGESTION = "Please check your internet connection"


class SessionState(str, Enum):
    CONFIGURING = "configuring"
    ANSWERING = "answering"
    EVALUATING = "evaluating"
    COMPLETED = "completed"


class SessionValidationError(ValidationError):  # Operation not allowed in the current state or input
    pass


def timeout_evaluation() -> Evaluation:
    return Evaluation(
        score=0,
        weaknesses=["No answer provided before time ran out"],
        feedback="Time expired without an answer.",
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InterviewSession:
    def __init__(
        self,
        gateway: GatewayClient,
        history: HistoryStore,
        *,
        streak: Optional[StreakTracker] = None,
        achievements: Optional[AchievementBook] = None,
        clock: Optional[Clock] = None,
        now: Optional[Callable[[], datetime]] = None,
        question_count: int = 5,
        profile: Optional[UserProfile] = None,
    ) -> None:
        if question_count < 1:
            raise ValueError("question_count must be at least 1")
        self._gateway = gateway
        self._history = history
        self._streak = streak
        self._achievements = achievements
        self._now = now or _utcnow
        self._countdown = Countdown(clock)

        self.interview_type: str = "Technical"
        self.difficulty: str = "Medium"
        self.question_count = question_count
        self.profile = profile or UserProfile()

        self.session_id = str(uuid.uuid4())
        self.events: List[Dict[str, Any]] = []
        self._epoch = 0
        self._reset()

    def _reset(self) -> None:
        self.state = SessionState.CONFIGURING
        self.questions: List[Question] = []
        self.answers: List[str] = []
        self.evaluations: List[Optional[Evaluation]] = []
        self.index = 0
        self.hint_visible = False
        self.error: Optional[str] = None
        self.result: Optional[SessionResult] = None
        self.record: Optional[InterviewRecord] = None
        self.unlocked: List[str] = []

    # --- read-only views -----------------------------------------------------

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def current_question(self) -> Optional[Question]:
        if self.state in (SessionState.ANSWERING, SessionState.EVALUATING):
            return self.questions[self.index]
        return None

    @property
    def current_answer(self) -> str:
        return self.answers[self.index] if self.current_question else ""

    @property
    def saved(self) -> bool:
        return self.record is not None

    def time_remaining(self, now: Optional[float] = None) -> Optional[int]:
        return self._countdown.remaining(now)

    # --- configuration -------------------------------------------------------

    def _require(self, *states: SessionState) -> None:
        if self.state not in states:
            allowed = ", ".join(state.value for state in states)
            raise SessionValidationError(
                f"Operation not allowed while {self.state.value}",
                details=f"Expected one of: {allowed}",
            )

    def select_type(self, interview_type: str) -> None:
        self._require(SessionState.CONFIGURING)
        if interview_type not in INTERVIEW_TYPES:
            raise SessionValidationError(f"Invalid interview type: {interview_type}")
        self.interview_type = interview_type

    def select_difficulty(self, difficulty: str) -> None:
        self._require(SessionState.CONFIGURING)
        if difficulty not in DIFFICULTIES:
            raise SessionValidationError(f"Invalid difficulty level: {difficulty}")
        self.difficulty = difficulty

    # --- lifecycle -----------------------------------------------------------

    def _token(self) -> Tuple[int, int]:
        return self._epoch, self.index

    def _is_stale(self, token: Tuple[int, int], expected: SessionState) -> bool:
        return token != self._token() or self.state is not expected

    def start(self) -> bool:
        """Fetch questions and begin answering; on failure stay configuring with ``error`` set."""

        self._require(SessionState.CONFIGURING)
        self.error = None
        token = self._token()
        try:
            with span(self.events, "generate_questions"):
                questions = self._gateway.generate_questions(
                    self.interview_type, self.difficulty, self.question_count, self.profile
                )
        except GatewayError as exc:
            self.error = exc.message
            log_event("start_failed", self.session_id, state=self.state.value, reason=exc.message, level=logging.WARNING)
            return False

        if self._is_stale(token, SessionState.CONFIGURING):
            logger.info("Discarding stale question batch session=%s", self.session_id)
            return False
        if not questions:
            self.error = NO_QUESTIONS_MESSAGE
            return False

        self.questions = list(questions)
        self.answers = ["" for _ in self.questions]
        self.evaluations = [None for _ in self.questions]
        self.index = 0
        self.hint_visible = False
        self.state = SessionState.ANSWERING
        self._countdown.start(self.questions[0].estimated_time)
        log_event(
            "session_started",
            self.session_id,
            state=self.state.value,
            index=self.index,
            ms=self.events[-1]["ms"],
            outcome=f"{len(self.questions)} questions",
        )
        return True

    def set_answer(self, text: str) -> None:
        self._require(SessionState.ANSWERING)
        self.answers[self.index] = text

    def toggle_hint(self) -> bool:
        self._require(SessionState.ANSWERING)
        self.hint_visible = not self.hint_visible
        return self.hint_visible

    def submit(self) -> Optional[Evaluation]:
        """Evaluate the current answer and advance; blank answers are rejected untouched."""

        self._require(SessionState.ANSWERING)
        if not self.answers[self.index].strip():
            raise SessionValidationError(EMPTY_ANSWER_MESSAGE)
        return self._evaluate(timed_out=False)

    def tick(self, now: Optional[float] = None) -> bool:
        """Auto-submit when the countdown has run out; returns True when it fired."""

        if self.state is not SessionState.ANSWERING or not self._countdown.expired(now):
            return False
        log_event("timer_expired", self.session_id, state=self.state.value, index=self.index)
        self._evaluate(timed_out=True)
        return True

    def _evaluate(self, *, timed_out: bool) -> Optional[Evaluation]:
        self.error = None
        self._countdown.cancel()
        self.state = SessionState.EVALUATING
        token = self._token()
        question = self.questions[self.index]
        answer = self.answers[self.index]

        if timed_out and not answer.strip():
            evaluation = timeout_evaluation()
        else:
            try:
                with span(self.events, "evaluate_answer"):
                    evaluation = self._gateway.evaluate_answer(
                        question.question,
                        answer,
                        {"type": self.interview_type, "difficulty": self.difficulty},
                    )
            except GatewayError as exc:
                logger.warning("Evaluation failed session=%s index=%s: %s", self.session_id, token[1], exc.message)
                evaluation = placeholder_evaluation(OFFLINE_SUGGESTION)

        if self._is_stale(token, SessionState.EVALUATING):
            log_event("stale_result", self.session_id, index=token[1], action="discarded")
            return None

        self.evaluations[self.index] = evaluation
        log_event("answer_evaluated", self.session_id, index=self.index, score=evaluation.score)
        self._advance()
        return evaluation

    def _advance(self) -> None:
        self.hint_visible = False
        if self.index == len(self.questions) - 1:
            self.result = summarize([evaluation for evaluation in self.evaluations if evaluation is not None])
            self.state = SessionState.COMPLETED
            log_event("session_completed", self.session_id, state=self.state.value, score=self.result.overall_score)
            return
        self.index += 1
        self.state = SessionState.ANSWERING
        self._countdown.start(self.questions[self.index].estimated_time)

    def save(self) -> InterviewRecord:
        """Persist the result once; later calls return the same record without writing."""

        self._require(SessionState.COMPLETED)
        if self.record is not None:
            return self.record
        now = self._now()
        record = InterviewRecord(
            id=uuid.uuid4().hex,
            type=self.interview_type,
            date=now.isoformat(),
            score=self.result.overall_score,
            feedback=feedback_lines([evaluation for evaluation in self.evaluations if evaluation is not None]),
        )
        records = self._history.append(record)
        self.record = record

        streak = self._streak.record_activity(now.date()) if self._streak else 0
        if self._achievements is not None:
            self.unlocked = self._achievements.check(
                total_interviews=len(records),
                highest_score=record.score,
                streak=streak,
                at=now,
            )
        log_event(
            "session_saved",
            self.session_id,
            score=record.score,
            outcome=",".join(self.unlocked) or "no new achievements",
        )
        return record

    def restart(self) -> None:
        """Drop all session data and go back to configuring; in-flight results become stale."""

        self._epoch += 1
        self._countdown.cancel()
        self._reset()
        self.session_id = str(uuid.uuid4())
        log_event("session_restarted", self.session_id, state=self.state.value)


__all__ = [
    "InterviewSession",
    "SessionState",
    "SessionValidationError",
    "timeout_evaluation",
    "EMPTY_ANSWER_MESSAGE",
    "NO_QUESTIONS_MESSAGE",
    "OFFLINE_SUGGESTION",
]
