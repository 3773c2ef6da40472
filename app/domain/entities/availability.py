from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ModernAvailabilityRow:
    """Row of the `availability` table: a concrete open window."""

    coach_id: str | None
    location_id: str | None
    starts_at: datetime
    ends_at: datetime
    status: str = "open"
    id: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status == "open"


@dataclass(frozen=True)
class LegacyAvailabilityRow:
    """Row of the `coach_availability` table: a recurring weekly window."""

    coach_id: str | None
    day_of_week: int | None  # 0 = Sunday ... 6 = Saturday
    start_time: str | None = None  # HH:MM
    end_time: str | None = None  # HH:MM
    location: str | None = None  # free-form venue name or city
    is_active: bool = True
    id: str | None = None

    @property
    def is_open(self) -> bool:
        return self.is_active


AvailabilityRow = ModernAvailabilityRow | LegacyAvailabilityRow
