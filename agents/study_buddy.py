"""Free-form chat with the study-buddy persona."""
from __future__ import annotations

import logging
import textwrap
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from config import ProviderRoute
from errors import UpstreamFormatError
from llm_gateway import HttpClient, generate

from .types import ChatMessage

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 5

FALLBACK_REPLY = (
    "I can't reach the AI service right now. Meanwhile, try answering one practice "
    "question out loud using the STAR method and review your last feedback."
)


def recent_messages(history: Sequence[Any]) -> List[ChatMessage]:
    """The last few turns of ``history`` that parse as chat messages."""

    messages: List[ChatMessage] = []
    for item in list(history)[-HISTORY_WINDOW:]:
        try:
            messages.append(ChatMessage.model_validate(item))
        except ValidationError:
            logger.debug("Skipping malformed chat message: %r", item)
    return messages


def _history_block(history: Sequence[Any]) -> str:
    lines = []
    for message in recent_messages(history):
        speaker = "User" if message.role == "user" else "AI"
        lines.append(f"{speaker}: {message.content}")
    if not lines:
        return ""
    return "\n\nConversation History:\n" + "\n".join(lines)


def build_prompt(user_message: str, history: Sequence[Any]) -> str:
    persona = textwrap.dedent(
        """\
        You are PrepMaster AI, a friendly and helpful interview preparation assistant. Your role is to:
        - Answer questions about interview preparation
        - Provide tips and advice on technical and behavioral interviews
        - Help users understand concepts and solve problems
        - Encourage and motivate users in their interview journey
        - Keep responses concise (2-3 sentences unless user asks for more detail)
        - Be encouraging, professional, and supportive
        """
    )
    return (
        f'{persona}\nUser Question: "{user_message}"{_history_block(history)}\n\n'
        "Provide a helpful, concise response. Do not use markdown formatting, just plain text."
    )


def chat(
    user_message: str,
    history: Optional[Sequence[Any]] = None,
    *,
    route: ProviderRoute,
    client: Optional[HttpClient] = None,
) -> str:
    reply = generate(build_prompt(user_message, history or []), route=route, client=client).strip()
    if not reply:
        raise UpstreamFormatError("AI returned an empty reply")
    return reply


__all__ = ["chat", "build_prompt", "recent_messages", "FALLBACK_REPLY", "HISTORY_WINDOW"]
