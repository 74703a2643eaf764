"""FastAPI routes for the PrepMaster+ gateway."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from agents import DIFFICULTIES, INTERVIEW_TYPES, AiProxyClient, User, UserProfile
from agents.answer_evaluator import placeholder_evaluation
from agents.common import string_list, text_or
from agents.learning_path import default_learning_path
from agents.study_buddy import FALLBACK_REPLY
from api import fallback
from api.schemas import ChatReq, EvaluateAnswerReq, InterviewQuestionsReq, LearningPathReq, LoginReq, MCQReq, SignupReq
from config import Settings
from errors import NotFoundError, StorageError, ValidationError
from storage.json_files import MCQ_BANK_FILE, INTERVIEW_BANK_FILE, RESOURCES_FILE, USERS_FILE, JsonDataStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

MIN_PASSWORD_LENGTH = 6


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ai(request: Request) -> AiProxyClient:
    return request.app.state.ai_client


def get_store(request: Request) -> JsonDataStore:
    return request.app.state.data_store


def _count(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    return value if isinstance(value, int) else None


def _failure(message: str, exc: BaseException) -> Dict[str, Any]:
    reason = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    return {
        "fallback": True,
        "message": f"{message} {reason}".strip(),
        "error": reason,
        "reason": type(exc).__name__,
    }


def _server_error(message: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "message": message, "details": details})


# --- Static reads -------------------------------------------------------------


@router.get("/health")
def health(settings: Settings = Depends(get_settings), ai: AiProxyClient = Depends(get_ai)) -> Dict[str, Any]:
    key = settings.GEMINI_API_KEY or ""
    return {
        "success": True,
        "status": "ok",
        "geminiApiConfigured": ai.configured,
        "apiKeyLength": len(key),
        "apiKeyPreview": ai.route.key_preview(),
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "port": settings.PORT,
    }


@router.get("/interview-questions")
def interview_questions(store: JsonDataStore = Depends(get_store)) -> Dict[str, Any]:
    return {"success": True, "questions": store.read(INTERVIEW_BANK_FILE)}


@router.get("/practice-questions")
def practice_questions(store: JsonDataStore = Depends(get_store)) -> Dict[str, Any]:
    return {"success": True, "questions": store.read(MCQ_BANK_FILE)}


@router.get("/resources")
def resources(store: JsonDataStore = Depends(get_store)) -> Dict[str, Any]:
    return {"success": True, "resources": store.read(RESOURCES_FILE)}


@router.get("/user")
def current_user(store: JsonDataStore = Depends(get_store)) -> Dict[str, Any]:
    users = store.read(USERS_FILE)
    return {"success": True, "user": users[0] if users else None}


# --- Demo auth ----------------------------------------------------------------
# Passwords are never stored or hashed; any password of valid length is accepted.


@router.post("/login")
def login(req: LoginReq, store: JsonDataStore = Depends(get_store)) -> Dict[str, Any]:
    if not req.email or req.password is None:
        raise ValidationError("Email and password are required")
    email = req.email.strip().lower()
    user = next(
        (u for u in store.read(USERS_FILE) if isinstance(u, dict) and str(u.get("email", "")).lower() == email),
        None,
    )
    if user is None or len(req.password) < MIN_PASSWORD_LENGTH:
        raise NotFoundError("Invalid credentials")
    return {"success": True, "user": user}


@router.post("/signup")
def signup(req: SignupReq, store: JsonDataStore = Depends(get_store)) -> Dict[str, Any]:
    if req.password is None or len(req.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters")
    if not (req.name or "").strip() or not (req.email or "").strip():
        raise ValidationError("Name and email are required")
    users = store.read(USERS_FILE)
    email = req.email.strip()
    if any(isinstance(u, dict) and str(u.get("email", "")).lower() == email.lower() for u in users):
        raise ValidationError("An account with this email already exists")
    new_user = User(name=req.name.strip(), email=email).model_dump(exclude={"profile_picture"})
    users.append(new_user)
    if not store.write(USERS_FILE, users):
        raise StorageError("Unable to save the new account")
    logger.info("Registered user email=%s", email)
    return {"success": True, "user": new_user}


# --- AI endpoints -------------------------------------------------------------


@router.post("/ai/interview-questions")
def ai_interview_questions(
    req: InterviewQuestionsReq,
    ai: AiProxyClient = Depends(get_ai),
    store: JsonDataStore = Depends(get_store),
) -> Any:
    if not req.type:
        raise ValidationError("Interview type is required", details="Please select Technical, HR, or Behavioral")
    if req.type not in INTERVIEW_TYPES:
        raise ValidationError(
            "Invalid interview type",
            details=f"Must be one of: Technical, HR, or Behavioral. Received: {req.type}",
        )
    if not req.difficulty:
        raise ValidationError("Difficulty level is required", details="Please select Easy, Medium, or Hard")
    if req.difficulty not in DIFFICULTIES:
        raise ValidationError(
            "Invalid difficulty level",
            details=f"Must be one of: Easy, Medium, or Hard. Received: {req.difficulty}",
        )
    count = _count(req.count)
    if count is None or count < 1:
        raise ValidationError("Count must be at least 1", details=f"Received count: {req.count}")

    if not ai.configured:
        logger.warning("GEMINI_API_KEY not configured. Using fallback data.")
        try:
            questions = fallback.interview_questions(store, req.type, req.difficulty, count)
        except StorageError as exc:
            return _server_error("Fallback question bank unavailable", exc.message)
        return {"success": True, "questions": questions, "fallback": True, "message": fallback.UNCONFIGURED_MESSAGE}

    raw_profile = req.user_profile or {}
    profile = UserProfile(skills=string_list(raw_profile.get("skills")), goals=text_or(raw_profile.get("goals"), ""))
    try:
        generated = ai.generate_questions(req.type, req.difficulty, count, profile)
        return {"success": True, "questions": [question.to_wire() for question in generated]}
    except Exception as exc:  # noqa: BLE001
        logger.warning("AI question generation failed kind=%s: %s", type(exc).__name__, exc)
        try:
            questions = fallback.interview_questions(store, req.type, req.difficulty, count)
        except StorageError as bank_exc:
            logger.error("Fallback data also failed: %s", bank_exc)
            return _server_error(
                "Failed to generate questions and fallback data unavailable",
                getattr(exc, "message", None) or str(exc),
            )
        return {
            "success": True,
            "questions": questions,
            **_failure("AI generation failed. Using static questions.", exc),
        }


@router.post("/ai/evaluate-answer")
def ai_evaluate_answer(req: EvaluateAnswerReq, ai: AiProxyClient = Depends(get_ai)) -> Dict[str, Any]:
    if not req.question or not req.answer:
        raise ValidationError("Missing required fields: question and answer are required")
    if not ai.configured:
        return {
            "success": True,
            "evaluation": placeholder_evaluation(fallback.UNSCORED_SUGGESTION).to_wire(),
            "fallback": True,
            "message": "AI evaluation unavailable. Configure GEMINI_API_KEY for detailed feedback.",
        }
    try:
        evaluation = ai.evaluate_answer(req.question, req.answer, req.context or {})
        return {"success": True, "evaluation": evaluation.to_wire()}
    except Exception as exc:  # noqa: BLE001
        logger.warning("AI evaluation failed kind=%s: %s", type(exc).__name__, exc)
        return {
            "success": True,
            "evaluation": placeholder_evaluation(fallback.UNSCORED_SUGGESTION).to_wire(),
            **_failure("AI evaluation failed.", exc),
        }


@router.post("/ai/learning-path")
def ai_learning_path(req: LearningPathReq, ai: AiProxyClient = Depends(get_ai)) -> Dict[str, Any]:
    weaknesses: List[str] = [item for item in (req.weaknesses or []) if isinstance(item, str)]
    if not ai.configured:
        return {
            "success": True,
            "learningPath": default_learning_path(weaknesses).to_wire(),
            "fallback": True,
            "message": "Using a default learning path. Configure GEMINI_API_KEY for a personalized plan.",
        }
    try:
        path = ai.generate_learning_path(req.user_stats or {}, weaknesses)
        return {"success": True, "learningPath": path.to_wire()}
    except Exception as exc:  # noqa: BLE001
        logger.warning("AI learning path failed kind=%s: %s", type(exc).__name__, exc)
        return {
            "success": True,
            "learningPath": default_learning_path(weaknesses).to_wire(),
            **_failure("AI learning path failed.", exc),
        }


@router.post("/ai/mcq-questions")
def ai_mcq_questions(
    req: MCQReq,
    ai: AiProxyClient = Depends(get_ai),
    store: JsonDataStore = Depends(get_store),
) -> Any:
    count = _count(req.count)
    if not req.topic or not req.difficulty or not count or count < 1:
        raise ValidationError("Missing required fields: topic, difficulty, and count are required")

    failure: Dict[str, Any] = {"fallback": True, "message": fallback.UNCONFIGURED_MESSAGE}
    if ai.configured:
        try:
            generated = ai.generate_mcq_questions(req.topic, req.difficulty, count)
            return {"success": True, "questions": [question.to_wire() for question in generated]}
        except Exception as exc:  # noqa: BLE001
            logger.warning("AI MCQ generation failed kind=%s: %s", type(exc).__name__, exc)
            failure = _failure("AI generation failed. Using static questions.", exc)
    try:
        questions = fallback.mcq_questions(store, req.topic, req.difficulty, count)
    except StorageError as exc:
        return _server_error("Failed to generate MCQ questions", exc.message)
    return {"success": True, "questions": questions, **failure}


@router.post("/ai/chat")
def ai_chat(req: ChatReq, ai: AiProxyClient = Depends(get_ai)) -> Dict[str, Any]:
    if not req.user_message:
        raise ValidationError("Missing required field: userMessage")
    if not ai.configured:
        return {"success": True, "response": FALLBACK_REPLY, "fallback": True, "message": "AI chat is not configured."}
    try:
        return {"success": True, "response": ai.chat(req.user_message, req.conversation_history or [])}
    except Exception as exc:  # noqa: BLE001
        logger.warning("AI chat failed kind=%s: %s", type(exc).__name__, exc)
        return {"success": True, "response": FALLBACK_REPLY, **_failure("AI chat failed.", exc)}
