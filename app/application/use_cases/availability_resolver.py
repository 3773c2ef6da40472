from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import date
from zoneinfo import ZoneInfo

from app.application.ports.backend import BackendQueryPort, Query
from app.application.utils.dates import (
    day_window,
    is_weekday,
    month_days,
    month_window,
    parse_timestamp,
    sunday_based_weekday,
    today_in,
)
from app.domain.entities.availability import AvailabilityRow, LegacyAvailabilityRow, ModernAvailabilityRow
from app.domain.entities.location import Location


logger = logging.getLogger(__name__)


class AvailabilitySource(ABC):
    """One schema shape of coach open hours."""

    name: str = "source"

    @abstractmethod
    def fetch_rows(self, month: date) -> list[AvailabilityRow]:
        """Open rows relevant to the month. Backend errors read as no rows."""
        raise NotImplementedError

    @abstractmethod
    def covers_date(self, day: date, rows: Sequence[AvailabilityRow], location: Location | None) -> bool:
        raise NotImplementedError


class ModernAvailabilitySource(AvailabilitySource):
    """`availability` table: timestamp windows with a status."""

    name = "availability"

    def __init__(self, backend: BackendQueryPort, timezone: ZoneInfo) -> None:
        self._backend = backend
        self._timezone = timezone

    def fetch_rows(self, month: date) -> list[AvailabilityRow]:
        start, end = month_window(month, self._timezone)
        query = (
            Query(self.name)
            .select("id, coach_id, starts_at, ends_at, location_id, status")
            .eq("status", "open")
            .gte("starts_at", start.isoformat())
            .lte("starts_at", end.isoformat())
        )
        result = self._backend.execute(query)
        if result.error:
            logger.warning("Availability query failed", extra={"table": self.name, "error": result.error})
            return []

        rows: list[AvailabilityRow] = []
        for raw in result.rows:
            starts_at = parse_timestamp(raw.get("starts_at"), self._timezone)
            ends_at = parse_timestamp(raw.get("ends_at"), self._timezone)
            if starts_at is None or ends_at is None:
                continue
            row = ModernAvailabilityRow(
                id=_opt_str(raw.get("id")),
                coach_id=_opt_str(raw.get("coach_id")),
                location_id=_opt_str(raw.get("location_id")),
                starts_at=starts_at,
                ends_at=ends_at,
                status=raw.get("status") or "open",
            )
            if row.is_open:
                rows.append(row)
        return rows

    def covers_date(self, day: date, rows: Sequence[AvailabilityRow], location: Location | None) -> bool:
        day_start, day_end = day_window(day, self._timezone)
        return any(
            row.starts_at < day_end and row.ends_at > day_start
            for row in rows
            if isinstance(row, ModernAvailabilityRow)
        )


class LegacyAvailabilitySource(AvailabilitySource):
    """`coach_availability` table: weekly recurring windows keyed by weekday."""

    name = "coach_availability"

    def __init__(self, backend: BackendQueryPort) -> None:
        self._backend = backend

    def fetch_rows(self, month: date) -> list[AvailabilityRow]:
        query = (
            Query(self.name)
            .select("id, coach_id, day_of_week, start_time, end_time, location, is_active")
            .eq("is_active", True)
        )
        result = self._backend.execute(query)
        if result.error:
            logger.warning("Availability query failed", extra={"table": self.name, "error": result.error})
            return []

        rows: list[AvailabilityRow] = []
        for raw in result.rows:
            row = LegacyAvailabilityRow(
                id=_opt_str(raw.get("id")),
                coach_id=_opt_str(raw.get("coach_id")),
                day_of_week=_opt_int(raw.get("day_of_week")),
                start_time=raw.get("start_time"),
                end_time=raw.get("end_time"),
                location=raw.get("location"),
                is_active=bool(raw.get("is_active", True)),
            )
            if row.is_open:
                rows.append(row)
        return rows

    def covers_date(self, day: date, rows: Sequence[AvailabilityRow], location: Location | None) -> bool:
        weekday = sunday_based_weekday(day)
        for row in rows:
            if not isinstance(row, LegacyAvailabilityRow) or row.day_of_week != weekday:
                continue
            if location is None or not location.name:
                return True
            if location.matches_label(row.location):
                return True
        return False


class AvailabilityResolver:
    """
    Decides which dates of a month can be offered.

    Sources are tried in order and the first one that yields rows decides.
    When none does (errors, empty tables, no backend) a synthesized set is
    returned so the calendar always has something selectable.
    """

    def __init__(
        self,
        backend: BackendQueryPort,
        timezone: ZoneInfo,
        sources: Sequence[AvailabilitySource] | None = None,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._backend = backend
        self._timezone = timezone
        self._sources = list(sources) if sources is not None else [
            ModernAvailabilitySource(backend, timezone),
            LegacyAvailabilitySource(backend),
        ]
        self._today = today_provider or (lambda: today_in(timezone))

    @property
    def backend_configured(self) -> bool:
        return self._backend.is_configured

    @property
    def timezone(self) -> ZoneInfo:
        return self._timezone

    def today(self) -> date:
        return self._today()

    def fetch_rows(self, month: date) -> tuple[AvailabilitySource | None, list[AvailabilityRow]]:
        """Rows from the first source that has any, with the source that produced them."""
        if not self._backend.is_configured:
            return None, []
        for source in self._sources:
            try:
                rows = source.fetch_rows(month)
            except Exception as e:
                logger.warning(
                    "Availability source raised",
                    extra={"table": source.name, "error": str(e)},
                )
                continue
            if rows:
                return source, rows
        return None, []

    def resolve_available_dates(self, month: date, location: Location | None = None) -> set[date]:
        today = self._today()
        future_days = [day for day in month_days(month) if day >= today]
        if not future_days:
            return set()

        try:
            source, rows = self.fetch_rows(month)
            if source is not None:
                dates = {day for day in future_days if source.covers_date(day, rows, location)}
                if dates:
                    return dates
        except Exception as e:
            logger.error("Error resolving available dates", extra={"month": month.isoformat(), "error": str(e)})

        logger.info(
            "No availability data found, using fallback dates",
            extra={"month": month.isoformat(), "reason": "configured" if self._backend.is_configured else "no_backend"},
        )
        return self._fallback_dates(future_days)

    def _fallback_dates(self, future_days: list[date]) -> set[date]:
        if not self._backend.is_configured:
            weekdays = {day for day in future_days if is_weekday(day)}
            if weekdays:
                return weekdays
        return set(future_days)


def _opt_str(value) -> str | None:
    return None if value is None else str(value)


def _opt_int(value) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
