from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from app.application.ports.draft_store import DRAFT_STORAGE_KEY, DraftStorePort


class JsonDraftStore(DraftStorePort):
    """Draft snapshots as JSON files, one directory per client namespace."""

    def __init__(self, data_dir: str = "./data/drafts", namespace: str = "default") -> None:
        self._dir = Path(data_dir) / namespace
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, key: str) -> threading.Lock:
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def _get_file_path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def exists(self, key: str = DRAFT_STORAGE_KEY) -> bool:
        return self._get_file_path(key).exists()

    def load(self, key: str = DRAFT_STORAGE_KEY) -> dict[str, Any] | None:
        file_path = self._get_file_path(key)
        with self._get_lock(key):
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                self._logger.warning("Unreadable draft snapshot", extra={"reason": key, "error": str(e)})
                return None
        return data if isinstance(data, dict) else None

    def save(self, snapshot: dict[str, Any], key: str = DRAFT_STORAGE_KEY) -> None:
        """Write atomically: temp file first, then rename over the old snapshot."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")
        with self._get_lock(key):
            self._dir.mkdir(parents=True, exist_ok=True)
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(snapshot, f, indent=2, ensure_ascii=False)
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink(missing_ok=True)
                raise

    def clear(self, key: str = DRAFT_STORAGE_KEY) -> None:
        with self._get_lock(key):
            self._get_file_path(key).unlink(missing_ok=True)
