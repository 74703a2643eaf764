from __future__ import annotations  # Re-export llm_gateway public API

from .classify import classify_exception, classify_status, classify_text
from .llm_gateway import HttpClient, HttpResponse, ensure_configured, generate
from .repair import extract_json, strip_code_fences

__all__ = [
    "HttpClient",
    "HttpResponse",
    "classify_exception",
    "classify_status",
    "classify_text",
    "ensure_configured",
    "extract_json",
    "generate",
    "strip_code_fences",
]
