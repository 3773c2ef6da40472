from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import httpx

from app.application.ports.backend import BackendQueryPort, Filter, Query, QueryResult
from app.core.config import settings


class SupabaseBackend(BackendQueryPort):
    """Row queries against a Supabase project through its PostgREST endpoint."""

    def __init__(
        self,
        url: str | None = None,
        anon_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = (url or settings.SUPABASE_URL or "").rstrip("/")
        self._anon_key = anon_key or settings.SUPABASE_ANON_KEY
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._url or not self._anon_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for the Supabase backend")

    @property
    def is_configured(self) -> bool:
        return True

    def execute(self, query: Query) -> QueryResult:
        params = [("select", _compact_columns(query.columns))]
        params.extend((flt.column, _encode_filter(flt)) for flt in query.filters)
        if query.order_by is not None:
            column, ascending = query.order_by
            params.append(("order", f"{column}.{'asc' if ascending else 'desc'}"))
        if query.limit_to is not None:
            params.append(("limit", str(query.limit_to)))

        try:
            response = self._client.get(self._table_url(query.table), params=params, headers=self._headers())
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Supabase query failed", extra={"table": query.table, "error": str(e)})
            return QueryResult(data=None, error=str(e))

        if not isinstance(data, list):
            return QueryResult(data=None, error="Unexpected response shape")
        return QueryResult(data=data)

    def insert(self, table: str, rows: list[dict[str, Any]]) -> QueryResult:
        headers = self._headers()
        headers["Content-Type"] = "application/json"
        headers["Prefer"] = "return=representation"
        try:
            response = self._client.post(self._table_url(table), json=rows, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Supabase insert failed", extra={"table": table, "error": str(e)})
            return QueryResult(data=None, error=str(e))
        return QueryResult(data=data if isinstance(data, list) else [data])

    def _table_url(self, table: str) -> str:
        return f"{self._url}/rest/v1/{table}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {self._anon_key}",
        }


def _compact_columns(columns: str) -> str:
    return "".join(columns.split())


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _encode_filter(flt: Filter) -> str:
    if flt.op == "in":
        return "in.(" + ",".join(_encode_value(v) for v in flt.value) + ")"
    if flt.op == "eq" and flt.value is None:
        return "is.null"
    return f"{flt.op}.{_encode_value(flt.value)}"
