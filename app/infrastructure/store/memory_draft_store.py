from __future__ import annotations

import copy
from typing import Any

from app.application.ports.draft_store import DRAFT_STORAGE_KEY, DraftStorePort


class MemoryDraftStore(DraftStorePort):
    def __init__(self) -> None:
        self._snapshots: dict[str, dict[str, Any]] = {}
        self.writes = 0

    def exists(self, key: str = DRAFT_STORAGE_KEY) -> bool:
        return key in self._snapshots

    def load(self, key: str = DRAFT_STORAGE_KEY) -> dict[str, Any] | None:
        snapshot = self._snapshots.get(key)
        return copy.deepcopy(snapshot) if snapshot is not None else None

    def save(self, snapshot: dict[str, Any], key: str = DRAFT_STORAGE_KEY) -> None:
        self._snapshots[key] = copy.deepcopy(snapshot)
        self.writes += 1

    def clear(self, key: str = DRAFT_STORAGE_KEY) -> None:
        self._snapshots.pop(key, None)
