"""Interview session engine: countdown, gateway client, scoring and the state machine."""
from .countdown import Clock, Countdown, SystemClock
from .gateway_client import GatewayClient, GatewayError
from .scoring import SessionResult, summarize
from .session import InterviewSession, SessionState, SessionValidationError

__all__ = [
    "Clock",
    "Countdown",
    "SystemClock",
    "GatewayClient",
    "GatewayError",
    "SessionResult",
    "summarize",
    "InterviewSession",
    "SessionState",
    "SessionValidationError",
]
