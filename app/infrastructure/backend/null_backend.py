from __future__ import annotations

from typing import Any

from app.application.ports.backend import BackendQueryPort, Query, QueryResult


NOT_CONFIGURED = "Backend not configured"


class NullBackend(BackendQueryPort):
    """Stand-in used when no backend credentials are set. Every call reports an error."""

    @property
    def is_configured(self) -> bool:
        return False

    def execute(self, query: Query) -> QueryResult:
        return QueryResult(data=None, error=NOT_CONFIGURED)

    def insert(self, table: str, rows: list[dict[str, Any]]) -> QueryResult:
        return QueryResult(data=None, error=NOT_CONFIGURED)
