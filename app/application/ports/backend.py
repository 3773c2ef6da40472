from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class Filter:
    column: str
    op: str  # "eq", "gte", "lte", "in"
    value: Any


@dataclass(frozen=True)
class Query:
    """Immutable select query against one named collection."""

    table: str
    columns: str = "*"
    filters: tuple[Filter, ...] = ()
    order_by: tuple[str, bool] | None = None  # (column, ascending)
    limit_to: int | None = None

    def select(self, columns: str) -> Query:
        return replace(self, columns=columns)

    def eq(self, column: str, value: Any) -> Query:
        return self._with(Filter(column, "eq", value))

    def gte(self, column: str, value: Any) -> Query:
        return self._with(Filter(column, "gte", value))

    def lte(self, column: str, value: Any) -> Query:
        return self._with(Filter(column, "lte", value))

    def in_(self, column: str, values: list[Any] | tuple[Any, ...]) -> Query:
        return self._with(Filter(column, "in", tuple(values)))

    def order(self, column: str, ascending: bool = True) -> Query:
        return replace(self, order_by=(column, ascending))

    def limit(self, count: int) -> Query:
        return replace(self, limit_to=count)

    def _with(self, flt: Filter) -> Query:
        return replace(self, filters=self.filters + (flt,))


@dataclass(frozen=True)
class QueryResult:
    data: list[dict[str, Any]] | None = None
    error: str | None = None

    @property
    def rows(self) -> list[dict[str, Any]]:
        """Rows of a successful query; an error reads as no rows."""
        if self.error or not self.data:
            return []
        return self.data


class BackendQueryPort(ABC):
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False when running without a backend (degraded mode)."""
        raise NotImplementedError

    @abstractmethod
    def execute(self, query: Query) -> QueryResult:
        """Run a select query. Failures are reported in QueryResult.error."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, table: str, rows: list[dict[str, Any]]) -> QueryResult:
        """Insert rows and return the stored representation."""
        raise NotImplementedError
