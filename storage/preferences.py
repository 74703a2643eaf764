from __future__ import annotations  # Bookmarks and theme preference

from typing import List, Literal

from .documents import load_document, save_document
from .kv import KeyValueStore

BOOKMARKS_KEY = "prepmaster_bookmarks"
THEME_KEY = "prepmaster_theme"

Theme = Literal["light", "dark"]


class Preferences:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def bookmarks(self) -> List[int]:
        raw = load_document(self._store, BOOKMARKS_KEY, default=[])
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, int) and not isinstance(item, bool)]

    def toggle_bookmark(self, resource_id: int) -> List[int]:
        current = self.bookmarks()
        if resource_id in current:
            current = [item for item in current if item != resource_id]
        else:
            current.append(resource_id)
        save_document(self._store, BOOKMARKS_KEY, current)
        return current

    def is_bookmarked(self, resource_id: int) -> bool:
        return resource_id in self.bookmarks()

    def theme(self) -> Theme:
        return "dark" if load_document(self._store, THEME_KEY) == "dark" else "light"

    def set_theme(self, theme: Theme) -> None:
        if theme not in ("light", "dark"):
            raise ValueError(f"Unknown theme: {theme}")
        save_document(self._store, THEME_KEY, theme)


__all__ = ["Preferences", "BOOKMARKS_KEY", "THEME_KEY"]
