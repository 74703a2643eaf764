"""Error taxonomy shared by the gateway, the AI proxy client and storage."""
from __future__ import annotations

from typing import Optional


class PrepError(RuntimeError):  # Base error for the application
    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(PrepError):  # Bad or missing request fields
    status_code = 400


class NotFoundError(PrepError):  # No matching local record
    status_code = 401


class ConfigurationError(PrepError):  # Provider credential missing or placeholder
    pass


class StorageError(PrepError):  # Local file or key-value store failure
    pass


class UpstreamError(PrepError):  # Provider-side failure
    status_code = 502


class UpstreamFormatError(UpstreamError):
    pass


class UpstreamAuthError(UpstreamError):
    pass


class UpstreamQuotaError(UpstreamError):
    pass


class UpstreamUnknownError(UpstreamError):
    pass


__all__ = [
    "PrepError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "StorageError",
    "UpstreamError",
    "UpstreamFormatError",
    "UpstreamAuthError",
    "UpstreamQuotaError",
    "UpstreamUnknownError",
]
