"""
Tests for expanding one day into hourly slots.
"""

from __future__ import annotations

from datetime import date, datetime

from app.application.use_cases.availability_resolver import AvailabilityResolver
from app.application.use_cases.time_slots import (
    BACKEND_HOURS,
    TimeSlotService,
    degraded_slots,
    expand_slots,
    slot_is_covered,
)
from app.domain.entities.availability import LegacyAvailabilityRow, ModernAvailabilityRow
from app.infrastructure.backend.memory_backend import MemoryBackend
from app.infrastructure.backend.null_backend import NullBackend

from conftest import LONDON, TODAY


DAY = date(2025, 3, 12)


def _modern(start_hour: int, end_hour: int) -> ModernAvailabilityRow:
    return ModernAvailabilityRow(
        coach_id="c1",
        location_id=None,
        starts_at=datetime(2025, 3, 12, start_hour, tzinfo=LONDON),
        ends_at=datetime(2025, 3, 12, end_hour, tzinfo=LONDON),
    )


def _available_hours(slots) -> list[int]:
    return [slot.start.hour for slot in slots if slot.available]


def test_degraded_mode_gives_nine_open_slots():
    slots = expand_slots(DAY, [], LONDON, backend_configured=False)

    assert len(slots) == 9
    assert all(slot.available for slot in slots)
    assert slots[0].display_label == "9:00 AM"
    assert slots[-1].display_label == "5:00 PM"


def test_modern_window_marks_covered_hours():
    slots = expand_slots(DAY, [_modern(10, 12)], LONDON)

    assert len(slots) == len(BACKEND_HOURS)
    assert _available_hours(slots) == [10, 11]
    assert [slot.start for slot in slots] == sorted(slot.start for slot in slots)
    assert len({slot.id for slot in slots}) == len(slots)


def test_slot_shape():
    slot = expand_slots(DAY, [_modern(10, 11)], LONDON)[2]

    assert slot.id == "2025-03-12-10"
    assert slot.display_label == "10:00 AM"
    assert (slot.end - slot.start).total_seconds() == 3600
    assert slot.available


def test_expansion_is_idempotent():
    rows = [_modern(8, 9), _modern(15, 17)]
    assert expand_slots(DAY, rows, LONDON) == expand_slots(DAY, rows, LONDON)


def test_no_covered_hour_falls_back_to_degraded_set():
    slots = expand_slots(DAY, [_modern(22, 23)], LONDON)

    assert slots == degraded_slots(DAY, LONDON)


def test_legacy_row_with_end_covers_range():
    row = LegacyAvailabilityRow(coach_id="c1", day_of_week=3, start_time="14:00", end_time="16:00")
    assert _available_hours(expand_slots(DAY, [row], LONDON)) == [14, 15]


def test_legacy_row_without_end_is_lenient():
    """Missing or inverted end times cover every hour from the start hour on."""
    open_ended = LegacyAvailabilityRow(coach_id="c1", day_of_week=3, start_time="18:00", end_time=None)
    inverted = LegacyAvailabilityRow(coach_id="c1", day_of_week=3, start_time="18:00", end_time="17:00")

    assert _available_hours(expand_slots(DAY, [open_ended], LONDON)) == [18, 19, 20]
    assert _available_hours(expand_slots(DAY, [inverted], LONDON)) == [18, 19, 20]


def test_unparseable_legacy_start_covers_nothing():
    row = LegacyAvailabilityRow(coach_id="c1", day_of_week=3, start_time="soon", end_time="12:00")
    assert not slot_is_covered(row, datetime(2025, 3, 12, 10, tzinfo=LONDON))


def test_service_without_backend_is_degraded():
    resolver = AvailabilityResolver(NullBackend(), LONDON, today_provider=lambda: TODAY)
    assert TimeSlotService(resolver).slots_for(DAY) == degraded_slots(DAY, LONDON)


def test_service_reads_backend_rows():
    backend = MemoryBackend(
        {
            "availability": [
                {
                    "coach_id": "c1",
                    "starts_at": "2025-03-12T13:00:00",
                    "ends_at": "2025-03-12T15:00:00",
                    "status": "open",
                }
            ]
        }
    )
    resolver = AvailabilityResolver(backend, LONDON, today_provider=lambda: TODAY)

    slots = TimeSlotService(resolver).slots_for(DAY)

    assert _available_hours(slots) == [13, 14]


def test_service_degrades_on_unexpected_error():
    class BrokenResolver(AvailabilityResolver):
        def fetch_rows(self, month):
            raise RuntimeError("network down")

    resolver = BrokenResolver(MemoryBackend(), LONDON, today_provider=lambda: TODAY)

    assert TimeSlotService(resolver).slots_for(DAY) == degraded_slots(DAY, LONDON)
