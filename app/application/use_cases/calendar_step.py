from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from app.application.exceptions import SelectionNotFound, SelectionRejected
from app.application.use_cases.availability_resolver import AvailabilityResolver
from app.application.use_cases.booking_wizard import BookingWizard
from app.application.use_cases.time_slots import TimeSlotService
from app.application.utils.dates import add_months, first_of_month
from app.application.utils.request_sequencer import RequestSequencer
from app.domain.entities.time_slot import TimeSlot


DATES_CHANNEL = "available_dates"
SLOTS_CHANNEL = "time_slots"


@dataclass(frozen=True)
class PendingRequest:
    token: int
    anchor: date  # month for date requests, day for slot requests


class CalendarStep:
    """
    Date & time step: month navigation, available dates and hourly slots.

    Fetches are split into begin/complete so an answer that arrives after a
    newer request was issued is discarded instead of overwriting fresher data.
    """

    def __init__(
        self,
        wizard: BookingWizard,
        resolver: AvailabilityResolver,
        slot_service: TimeSlotService,
        sequencer: RequestSequencer | None = None,
        clock: Callable[[], float] = time.monotonic,
        debounce_seconds: float = 0.2,
    ) -> None:
        self._wizard = wizard
        self._resolver = resolver
        self._slot_service = slot_service
        self._sequencer = sequencer or RequestSequencer()
        self._clock = clock
        self._debounce_seconds = debounce_seconds
        self._last_navigation: float | None = None
        self._month = first_of_month(wizard.draft.date or resolver.today())
        self._available_dates: set[date] = set()
        self._time_slots: list[TimeSlot] = []
        self._logger = logging.getLogger(__name__)

    @property
    def current_month(self) -> date:
        return self._month

    @property
    def available_dates(self) -> set[date]:
        return set(self._available_dates)

    @property
    def time_slots(self) -> list[TimeSlot]:
        return list(self._time_slots)

    def navigate_month(self, direction: int) -> bool:
        """Move one month back or forward. Clicks inside the debounce window are dropped."""
        now = self._clock()
        if self._last_navigation is not None and now - self._last_navigation < self._debounce_seconds:
            return False
        self._last_navigation = now

        self._month = add_months(self._month, 1 if direction > 0 else -1)
        selected = self._wizard.draft.date
        if selected is not None and first_of_month(selected) != self._month:
            self._wizard.set_date(None)
            self._time_slots = []
        return True

    def show_month(self, month: date) -> None:
        self._month = first_of_month(month)

    def begin_dates_request(self) -> PendingRequest:
        return PendingRequest(self._sequencer.issue(DATES_CHANNEL), self._month)

    def complete_dates_request(self, request: PendingRequest, dates: set[date]) -> bool:
        if not self._sequencer.is_current(DATES_CHANNEL, request.token):
            self._logger.info("Discarding stale availability response", extra={"month": request.anchor.isoformat()})
            return False
        self._available_dates = set(dates)
        return True

    def refresh_available_dates(self) -> set[date]:
        request = self.begin_dates_request()
        dates = self._resolver.resolve_available_dates(request.anchor, self._wizard.draft.location)
        self.complete_dates_request(request, dates)
        return self.available_dates

    def begin_slots_request(self) -> PendingRequest | None:
        day = self._wizard.draft.date
        if day is None:
            return None
        return PendingRequest(self._sequencer.issue(SLOTS_CHANNEL), day)

    def complete_slots_request(self, request: PendingRequest, slots: list[TimeSlot]) -> bool:
        if not self._sequencer.is_current(SLOTS_CHANNEL, request.token):
            self._logger.info("Discarding stale time slot response", extra={"reason": request.anchor.isoformat()})
            return False
        self._time_slots = list(slots)
        return True

    def refresh_time_slots(self) -> list[TimeSlot]:
        request = self.begin_slots_request()
        if request is None:
            self._sequencer.issue(SLOTS_CHANNEL)
            self._time_slots = []
            return []
        self.complete_slots_request(request, self._slot_service.slots_for(request.anchor))
        return self.time_slots

    def select_date(self, day: date) -> list[TimeSlot]:
        if day < self._resolver.today():
            raise SelectionRejected(f"{day.isoformat()} is in the past")
        offered = self._resolver.resolve_available_dates(first_of_month(day), self._wizard.draft.location)
        if day not in offered:
            raise SelectionRejected(f"{day.isoformat()} has no sessions available")
        self._wizard.set_date(day)
        self._month = first_of_month(day)
        return self.refresh_time_slots()

    def select_time_slot(self, slot_id: str) -> TimeSlot:
        for slot in self._time_slots:
            if slot.id == slot_id:
                if not self._wizard.set_time_slot(slot):
                    raise SelectionRejected(f"Time slot {slot_id} is not available")
                return slot
        raise SelectionNotFound(f"Unknown time slot {slot_id}")
