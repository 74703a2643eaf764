"""Pydantic schemas for the gateway API.

Fields are optional on purpose: missing values are reported by the route as a
``{success: false}`` 400 rather than FastAPI's default 422.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GatewayReq(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LoginReq(GatewayReq):
    email: Optional[str] = None
    password: Optional[str] = None


class SignupReq(GatewayReq):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class InterviewQuestionsReq(GatewayReq):
    type: Optional[str] = None
    difficulty: Optional[str] = None
    count: Optional[Any] = None
    user_profile: Optional[Dict[str, Any]] = Field(default=None, alias="userProfile")


class EvaluateAnswerReq(GatewayReq):
    question: Optional[str] = None
    answer: Optional[str] = None
    context: Optional[Dict[str, Any]] = None


class LearningPathReq(GatewayReq):
    user_stats: Optional[Dict[str, Any]] = Field(default=None, alias="userStats")
    weaknesses: Optional[List[Any]] = None


class MCQReq(GatewayReq):
    topic: Optional[str] = None
    difficulty: Optional[str] = None
    count: Optional[Any] = None


class ChatReq(GatewayReq):
    user_message: Optional[str] = Field(default=None, alias="userMessage")
    conversation_history: Optional[List[Any]] = Field(default=None, alias="conversationHistory")
