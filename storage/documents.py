"""JSON document helpers over a key-value store.

Read failures are logged and reported as ``None``; they never propagate.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from errors import StorageError

from .kv import KeyValueStore

logger = logging.getLogger(__name__)

_MISSING = object()


def load_document(store: KeyValueStore, key: str, default: Any = None) -> Any:
    """Return the parsed document for ``key`` or ``default`` when absent or unreadable."""

    present, value = load_document_or_corrupt(store, key)
    if not present or is_corrupt(value):
        return default
    return value


def load_document_or_corrupt(store: KeyValueStore, key: str) -> tuple[bool, Any]:
    """Return ``(present, value)``; unparsable data yields a value flagged by ``is_corrupt``."""

    try:
        raw = store.read(key)
    except Exception as exc:  # noqa: BLE001
        logger.error("%s", StorageError(f"Unable to read {key}: {exc}"))
        return False, None
    if raw is None:
        return False, None
    try:
        return True, json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("%s", StorageError(f"Corrupted data under {key}: {exc}"))
        return True, _MISSING


def is_corrupt(value: Any) -> bool:
    return value is _MISSING


def save_document(store: KeyValueStore, key: str, value: Any) -> bool:
    """Overwrite the document for ``key``; failures are logged and return False."""

    try:
        store.write(key, json.dumps(value, ensure_ascii=False).encode("utf-8"))
    except Exception as exc:  # noqa: BLE001
        logger.error("%s", StorageError(f"Unable to write {key}: {exc}"))
        return False
    return True


def drop_document(store: KeyValueStore, key: str) -> None:
    try:
        store.delete(key)
    except Exception as exc:  # noqa: BLE001
        logger.error("%s", StorageError(f"Unable to delete {key}: {exc}"))


__all__ = [
    "load_document",
    "load_document_or_corrupt",
    "is_corrupt",
    "save_document",
    "drop_document",
]
