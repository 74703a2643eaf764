from __future__ import annotations  # Generation provider request gateway

import logging
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from config import ProviderRoute
from errors import ConfigurationError, UpstreamFormatError

from .classify import classify_exception, classify_status


logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


def ensure_configured(route: ProviderRoute) -> None:  # Refuse to call out without a usable credential
    if not route.configured:
        raise ConfigurationError(
            "Gemini API key is not configured. Please set GEMINI_API_KEY in your .env file."
        )


def generate(
    prompt: str,
    *,
    route: ProviderRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> str:  # Send one prompt to the provider and return the first candidate's text
    ensure_configured(route)
    payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    if options:
        payload["generationConfig"] = dict(options)
    headers = {"Content-Type": "application/json", "x-goog-api-key": route.api_key or ""}
    headers.update(route.extra_headers)
    preview = _preview(prompt)
    logger.info("LLM request send route=%s model=%s preview=%s", route.name, route.model, preview)
    try:
        response, close_cb = _post(route.url, payload, headers, route.timeout_s, client)
    except Exception as exc:  # noqa: BLE001
        error = classify_exception(exc)
        logger.error("LLM transport failure kind=%s: %s", type(error).__name__, exc)
        raise error from exc
    try:
        if response.status_code >= 400:
            error = classify_status(response.status_code, _safe_text(response))
            logger.error("LLM error status=%s kind=%s", response.status_code, type(error).__name__)
            raise error
        try:
            data = response.json()
        except Exception as exc:  # noqa: BLE001
            logger.error("Invalid JSON payload from LLM: %s", exc)
            raise UpstreamFormatError("LLM payload was not JSON") from exc
        text = _extract_text(data)
    finally:
        _close_safely(close_cb)
    logger.info("LLM request done route=%s model=%s chars=%d", route.name, route.model, len(text))
    return text


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        response = client.post(url, json=payload, headers=headers, timeout=timeout)
        return response, None
    import httpx

    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _safe_text(response: HttpResponse) -> str:
    try:
        return response.text
    except Exception:  # noqa: BLE001
        return ""


def _preview(prompt: str) -> str:  # Build preview string for logging
    for line in prompt.splitlines():
        text = line.strip()
        if text:
            return text if len(text) <= 120 else text[:117] + "..."
    return ""


def _extract_text(data: Any) -> str:  # Extract generated text from a generateContent response
    if isinstance(data, dict):
        feedback = data.get("promptFeedback")
        candidates = data.get("candidates")
        if isinstance(candidates, list) and candidates:
            first = candidates[0] if isinstance(candidates[0], dict) else {}
            content = first.get("content")
            parts = content.get("parts") if isinstance(content, dict) else None
            if isinstance(parts, list):
                texts = [part.get("text") for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
                if texts:
                    return "".join(texts)
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            raise UpstreamFormatError(f"LLM blocked the prompt: {feedback['blockReason']}")
    raise UpstreamFormatError("LLM response missing content")
