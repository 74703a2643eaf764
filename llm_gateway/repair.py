from __future__ import annotations  # Local JSON repair for provider output

import json
import logging
import re
from typing import Any, Literal

from errors import UpstreamFormatError

logger = logging.getLogger(__name__)

Shape = Literal["array", "object"]

_SPANS = {
    "array": re.compile(r"\[[\s\S]*\]"),
    "object": re.compile(r"\{[\s\S]*\}"),
}


def strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[0].strip() == "":
                lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text


def extract_json(content: str, expect: Shape = "array") -> Any:
    """Parse provider text as JSON after a single repair pass.

    The pass strips markdown fences, then keeps the outermost bracketed
    (``expect="array"``) or braced (``expect="object"``) span. Anything that
    still fails to parse raises :class:`UpstreamFormatError`.
    """

    text = strip_code_fences(content or "")
    match = _SPANS[expect].search(text)
    if match:
        text = match.group(0)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("LLM output was not valid JSON: %s", exc)
        raise UpstreamFormatError(
            f"AI response format error: {exc}. The AI may have returned invalid JSON.",
            details=text[:200],
        ) from exc


__all__ = ["extract_json", "strip_code_fences"]
