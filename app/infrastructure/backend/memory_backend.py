from __future__ import annotations

import copy
import itertools
from datetime import datetime, timezone
from typing import Any

from app.application.ports.backend import BackendQueryPort, Filter, Query, QueryResult


class MemoryBackend(BackendQueryPort):
    """In-process tables with the same filter semantics as the hosted backend."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self._failing: dict[str, str] = {}
        self._ids = itertools.count(1)
        self.queries: list[Query] = []

    @property
    def is_configured(self) -> bool:
        return True

    def fail_table(self, table: str, message: str = "relation does not exist") -> None:
        self._failing[table] = message

    def rows(self, table: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._tables.get(table, []))

    def execute(self, query: Query) -> QueryResult:
        self.queries.append(query)
        if query.table in self._failing:
            return QueryResult(data=None, error=self._failing[query.table])

        rows = [row for row in self._tables.get(query.table, []) if all(_matches(row, f) for f in query.filters)]
        if query.order_by is not None:
            column, ascending = query.order_by
            present = [row for row in rows if _lookup(row, column) is not None]
            missing = [row for row in rows if _lookup(row, column) is None]
            present.sort(key=lambda row: _comparable(_lookup(row, column)), reverse=not ascending)
            rows = present + missing
        if query.limit_to is not None:
            rows = rows[: query.limit_to]
        return QueryResult(data=copy.deepcopy(rows))

    def insert(self, table: str, rows: list[dict[str, Any]]) -> QueryResult:
        if table in self._failing:
            return QueryResult(data=None, error=self._failing[table])
        stored = []
        for row in rows:
            record = dict(row)
            record.setdefault("id", f"{table}-{next(self._ids)}")
            record.setdefault("created_at", datetime.now(timezone.utc).isoformat())
            self._tables.setdefault(table, []).append(record)
            stored.append(copy.deepcopy(record))
        return QueryResult(data=stored)


def _lookup(row: dict[str, Any], column: str) -> Any:
    value: Any = row
    for part in column.split("."):
        if isinstance(value, list):
            value = value[0] if value else None
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return value


def _matches(row: dict[str, Any], flt: Filter) -> bool:
    value = _lookup(row, flt.column)
    if flt.op == "eq":
        return value == flt.value
    if flt.op == "in":
        return value in flt.value
    if value is None:
        return False
    left, right = _comparable(value), _comparable(flt.value)
    try:
        if flt.op == "gte":
            return left >= right
        if flt.op == "lte":
            return left <= right
    except TypeError:
        return False
    raise ValueError(f"Unsupported filter operator: {flt.op}")
