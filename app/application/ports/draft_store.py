from abc import ABC, abstractmethod
from typing import Any


DRAFT_STORAGE_KEY = "booking-flow-data"


class DraftStorePort(ABC):
    @abstractmethod
    def load(self, key: str = DRAFT_STORAGE_KEY) -> dict[str, Any] | None:
        """Return the stored snapshot, or None when missing or unreadable."""
        raise NotImplementedError

    @abstractmethod
    def save(self, snapshot: dict[str, Any], key: str = DRAFT_STORAGE_KEY) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self, key: str = DRAFT_STORAGE_KEY) -> None:
        raise NotImplementedError
