from __future__ import annotations  # Flat JSON documents under the gateway data directory

import json
import logging
from pathlib import Path
from typing import Any, List

from errors import StorageError

logger = logging.getLogger(__name__)

USERS_FILE = "user.json"
INTERVIEW_BANK_FILE = "interview.json"
MCQ_BANK_FILE = "questions.json"
RESOURCES_FILE = "resources.json"


class JsonDataStore:  # Whole-file read-modify-write; last writer wins
    def __init__(self, data_dir: Path) -> None:
        self._dir = Path(data_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def load(self, filename: str) -> List[Any]:
        """Read a document strictly; raises StorageError when missing or unreadable."""

        path = self._dir / filename
        if not path.exists():
            raise StorageError(f"{filename} is missing from {self._dir}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"Error reading {filename}: {exc}") from exc
        if not isinstance(data, list):
            raise StorageError(f"{filename} does not hold a JSON array")
        return data

    def read(self, filename: str) -> List[Any]:
        """Read a document leniently; problems are logged and read as empty."""

        try:
            return self.load(filename)
        except StorageError as exc:
            if (self._dir / filename).exists():
                logger.error("%s", exc)
            return []

    def write(self, filename: str, data: List[Any]) -> bool:
        path = self._dir / filename
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.error("%s", StorageError(f"Error writing {filename}: {exc}"))
            return False
        return True


__all__ = [
    "JsonDataStore",
    "USERS_FILE",
    "INTERVIEW_BANK_FILE",
    "MCQ_BANK_FILE",
    "RESOURCES_FILE",
]
