from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from app.application.use_cases.availability_resolver import AvailabilityResolver
from app.application.utils.dates import first_of_month, format_hour_label, parse_hour
from app.domain.entities.availability import AvailabilityRow, LegacyAvailabilityRow, ModernAvailabilityRow
from app.domain.entities.time_slot import TimeSlot


logger = logging.getLogger(__name__)

BACKEND_HOURS = range(8, 21)  # 8:00 .. 20:00 starts
DEGRADED_HOURS = range(9, 18)  # 9:00 .. 17:00 starts
SLOT_LENGTH = timedelta(hours=1)


def slot_is_covered(row: AvailabilityRow, slot_start: datetime) -> bool:
    """
    Coverage policy for one availability row and one hourly slot.

    Lenient on purpose: a legacy row with a missing end time, or an end time
    not after its start, covers every hour from its start hour on.
    """
    if isinstance(row, ModernAvailabilityRow):
        return row.starts_at <= slot_start < row.ends_at

    if isinstance(row, LegacyAvailabilityRow):
        start_hour = parse_hour(row.start_time)
        if start_hour is None:
            return False
        end_hour = parse_hour(row.end_time)
        hour = slot_start.hour
        if end_hour is None or end_hour <= start_hour:
            return hour >= start_hour
        return start_hour <= hour < end_hour

    return False


def _build_slot(day: date, hour: int, timezone: ZoneInfo, available: bool) -> TimeSlot:
    start = datetime.combine(day, time(hour=hour), tzinfo=timezone)
    return TimeSlot(
        id=f"{day.isoformat()}-{hour:02d}",
        start=start,
        end=start + SLOT_LENGTH,
        display_label=format_hour_label(start),
        available=available,
    )


def degraded_slots(day: date, timezone: ZoneInfo) -> list[TimeSlot]:
    return [_build_slot(day, hour, timezone, True) for hour in DEGRADED_HOURS]


def expand_slots(
    day: date,
    rows: Sequence[AvailabilityRow],
    timezone: ZoneInfo,
    backend_configured: bool = True,
) -> list[TimeSlot]:
    """Hourly slots of one day, ascending, each flagged available or not."""
    if not backend_configured:
        return degraded_slots(day, timezone)

    slots = []
    for hour in BACKEND_HOURS:
        start = datetime.combine(day, time(hour=hour), tzinfo=timezone)
        available = any(slot_is_covered(row, start) for row in rows)
        slots.append(_build_slot(day, hour, timezone, available))

    if not any(slot.available for slot in slots):
        return degraded_slots(day, timezone)
    return slots


class TimeSlotService:
    def __init__(self, resolver: AvailabilityResolver) -> None:
        self._resolver = resolver
        self._logger = logging.getLogger(__name__)

    def slots_for(self, day: date) -> list[TimeSlot]:
        timezone = self._resolver.timezone
        try:
            if not self._resolver.backend_configured:
                return expand_slots(day, [], timezone, backend_configured=False)
            _, rows = self._resolver.fetch_rows(first_of_month(day))
            slots = expand_slots(day, rows, timezone)
            if not rows:
                self._logger.warning("No time slots found, generating fallback slots", extra={"reason": "no_rows"})
            return slots
        except Exception as e:
            self._logger.error("Error fetching time slots", extra={"error": str(e)})
            return degraded_slots(day, timezone)
