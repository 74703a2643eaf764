from __future__ import annotations  # Cached signed-in user

import logging
from typing import Any, Optional

from pydantic import ValidationError

from agents.types import User

from .documents import drop_document, load_document, save_document
from .kv import KeyValueStore

logger = logging.getLogger(__name__)

USER_KEY = "prepai_user"


class AuthSessionCache:  # Auth session kept between visits
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> Optional[User]:
        raw = load_document(self._store, USER_KEY)
        if not isinstance(raw, dict) or not raw.get("email") or not raw.get("name"):
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring malformed cached user")
            return None

    def store(self, user: User) -> None:
        save_document(self._store, USER_KEY, user.to_wire())

    def clear(self) -> None:
        drop_document(self._store, USER_KEY)

    def update(self, **fields: Any) -> Optional[User]:
        """Merge ``fields`` into the cached user; no-op when signed out."""

        current = self.load()
        if current is None:
            return None
        merged = User.model_validate({**current.model_dump(), **fields})
        self.store(merged)
        return merged


__all__ = ["AuthSessionCache", "USER_KEY"]
