"""Persistence helpers: gateway JSON files and the local key-value layer."""
from .achievements import AchievementBook
from .auth_cache import AuthSessionCache
from .history import HistoryStore, InterviewRecord
from .json_files import JsonDataStore
from .kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .preferences import Preferences
from .streak import StreakTracker

__all__ = [
    "AchievementBook",
    "AuthSessionCache",
    "HistoryStore",
    "InterviewRecord",
    "JsonDataStore",
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "Preferences",
    "StreakTracker",
]
