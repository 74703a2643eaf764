"""Map provider failures onto the upstream error taxonomy.

The provider exposes no stable machine-readable error code on every failure
path, so the status-code mapping is tried first and the free-text substring
match is only a last resort. The substring boundaries are heuristic and can
misclassify (a message quoting "429" in another context reads as quota).
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple, Type

from errors import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamQuotaError,
    UpstreamUnknownError,
)

_STATUS_KINDS: Dict[int, Type[UpstreamError]] = {
    401: UpstreamAuthError,
    403: UpstreamAuthError,
    429: UpstreamQuotaError,
}

_PROVIDER_STATUS_KINDS: Dict[str, Type[UpstreamError]] = {
    "RESOURCE_EXHAUSTED": UpstreamQuotaError,
    "UNAUTHENTICATED": UpstreamAuthError,
    "PERMISSION_DENIED": UpstreamAuthError,
}

# Checked in order; first marker found wins.
_TEXT_MARKERS: Tuple[Tuple[Tuple[str, ...], Type[UpstreamError], str], ...] = (
    (("quota", "429", "rate limit"), UpstreamQuotaError, "API quota exceeded. Please try again later."),
    (("401", "unauthorized", "api key", "api_key"), UpstreamAuthError, "API key authentication failed. Please verify your API key."),
    (("403", "forbidden"), UpstreamAuthError, "API key permission denied. Please check if your API key is valid and has proper permissions."),
)

_STATUS_MESSAGES: Dict[Type[UpstreamError], str] = {
    UpstreamQuotaError: "API quota exceeded. Please try again later.",
    UpstreamAuthError: "API key authentication failed. Please verify your API key.",
}


def classify_text(text: Optional[str]) -> UpstreamError:
    """Classify an unstructured provider message by case-insensitive substring."""

    raw = (text or "").strip()
    lowered = raw.lower()
    for markers, kind, message in _TEXT_MARKERS:
        if any(marker in lowered for marker in markers):
            return kind(message, details=raw or None)
    return UpstreamUnknownError(f"Failed to reach the AI provider: {raw or 'Unknown error'}", details=raw or None)


def classify_status(status_code: int, body: Optional[str] = None, provider_status: Optional[str] = None) -> UpstreamError:
    """Classify an HTTP failure from the provider, falling back to its text."""

    kind = _STATUS_KINDS.get(status_code)
    if kind is None and provider_status:
        kind = _PROVIDER_STATUS_KINDS.get(provider_status.upper())
    if kind is None and body:
        kind = _provider_status_from_body(body)
    if kind is not None:
        return kind(_STATUS_MESSAGES[kind], details=f"status={status_code} {(body or '')[:200]}".strip())
    return classify_text(f"{status_code} {body or ''}")


def classify_exception(exc: BaseException) -> UpstreamError:
    """Classify a transport-level exception raised while calling the provider."""

    if isinstance(exc, UpstreamError):
        return exc
    status = getattr(getattr(exc, "response", None), "status_code", None)
    if isinstance(status, int) and status >= 400:
        return classify_status(status, str(exc))
    return classify_text(str(exc) or type(exc).__name__)


def _provider_status_from_body(body: str) -> Optional[Type[UpstreamError]]:
    upper = body.upper()
    for marker, kind in _PROVIDER_STATUS_KINDS.items():
        if f'"{marker}"' in upper:
            return kind
    return None


__all__ = ["classify_text", "classify_status", "classify_exception"]
