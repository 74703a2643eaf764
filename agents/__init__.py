"""AI proxy client operations backed by the generation provider."""
from .client import AiProxyClient
from .types import (
    DIFFICULTIES,
    INTERVIEW_TYPES,
    ChatMessage,
    Evaluation,
    LearningPath,
    LearningTopic,
    MCQQuestion,
    Question,
    User,
    UserProfile,
)

__all__ = [
    "AiProxyClient",
    "DIFFICULTIES",
    "INTERVIEW_TYPES",
    "ChatMessage",
    "Evaluation",
    "LearningPath",
    "LearningTopic",
    "MCQQuestion",
    "Question",
    "User",
    "UserProfile",
]
