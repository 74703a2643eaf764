"""Shared coercion helpers for provider output."""
from __future__ import annotations

import math
import uuid
from typing import Any, List, Optional


def text_or(value: Any, default: str) -> str:
    """Return ``value`` stripped when it is a non-empty string, else ``default``."""

    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def string_list(value: Any) -> List[str]:
    """Keep only the non-empty strings of a list-like value."""

    if not isinstance(value, (list, tuple)):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def number_or(value: Any, default: Optional[float] = None) -> Optional[float]:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            parsed = float(value.strip().rstrip("%"))
        except ValueError:
            return default
        return parsed if math.isfinite(parsed) else default
    return default


def clamp(value: float, low: int, high: int) -> int:
    return int(max(low, min(high, round(value))))


def fresh_id(prefix: str, index: int) -> str:
    return f"{prefix}-{index + 1}-{uuid.uuid4().hex[:8]}"


def as_records(data: Any) -> List[dict]:
    """Normalise parsed JSON to a list of objects."""

    items = data if isinstance(data, list) else [data]
    return [item for item in items if isinstance(item, dict)]


__all__ = ["text_or", "string_list", "number_or", "clamp", "fresh_id", "as_records"]
