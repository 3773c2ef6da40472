from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime

from app.application.ports.draft_store import DRAFT_STORAGE_KEY, DraftStorePort
from app.application.ports.navigator import NavigatorPort
from app.application.utils.draft_snapshot import draft_from_snapshot, draft_to_snapshot
from app.domain.entities.booking_draft import BookingDraft, BookingStep
from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location
from app.domain.entities.payment import PaymentConfirmation
from app.domain.entities.player import PlayerDetails
from app.domain.entities.time_slot import TimeSlot


Scheduler = Callable[[float, Callable[[], None]], object]


def thread_timer_scheduler(delay_seconds: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


class DraftObserver(ABC):
    @abstractmethod
    def draft_changed(self, draft: BookingDraft) -> None:
        raise NotImplementedError

    @abstractmethod
    def draft_discarded(self) -> None:
        raise NotImplementedError


class BookingWizard:
    """
    Six-step booking flow: Location -> Date & Time -> Coach -> Player ->
    Payment -> Confirmation.

    Forward moves are gated on the current step being complete; going back
    is always allowed above step 1. Observers are told about every draft
    change so persistence stays outside the state machine.
    """

    TOTAL_STEPS = len(BookingStep)

    def __init__(
        self,
        navigator: NavigatorPort,
        today_provider: Callable[[], date],
        scheduler: Scheduler = thread_timer_scheduler,
        redirect_delay_seconds: float = 3.0,
    ) -> None:
        self._navigator = navigator
        self._today = today_provider
        self._scheduler = scheduler
        self._redirect_delay_seconds = redirect_delay_seconds
        self._observers: list[DraftObserver] = []
        self._step = BookingStep.LOCATION
        self._draft = BookingDraft(date=today_provider())
        self._confirmed = False
        self._handed_off = False
        self._logger = logging.getLogger(__name__)

    @property
    def current_step(self) -> BookingStep:
        return self._step

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def is_confirmed(self) -> bool:
        return self._confirmed

    @property
    def handed_off(self) -> bool:
        return self._handed_off

    @property
    def next_button_text(self) -> str:
        if self._step == BookingStep.CONFIRMATION:
            return "Complete Booking"
        if self._step == BookingStep.PAYMENT:
            return "Proceed to Payment"
        return "Next"

    def add_observer(self, observer: DraftObserver) -> None:
        self._observers.append(observer)

    def restore(self, draft: BookingDraft) -> None:
        self._update(draft)

    def can_proceed_to_next(self) -> bool:
        draft = self._draft
        if self._step == BookingStep.LOCATION:
            return draft.location is not None
        if self._step == BookingStep.DATE_TIME:
            return draft.date is not None and draft.time_slot is not None
        if self._step == BookingStep.COACH:
            return draft.coach is not None and not draft.coach.is_unavailable
        if self._step == BookingStep.PLAYER:
            return draft.player is not None and draft.player.is_complete
        if self._step == BookingStep.PAYMENT:
            return draft.payment is not None
        return True

    def handle_next(self) -> bool:
        if not self.can_proceed_to_next():
            return False

        if self._step == BookingStep.CONFIRMATION:
            self._hand_off_to_dashboard()
            return True

        self._step = BookingStep(self._step + 1)
        self._logger.info("Booking step advanced", extra={"step": self._step.title})
        if self._step == BookingStep.CONFIRMATION:
            self._enter_confirmation()
        return True

    def handle_previous(self) -> bool:
        if self._step == BookingStep.LOCATION or self._confirmed:
            return False
        self._step = BookingStep(self._step - 1)
        return True

    def handle_cancel(self) -> bool:
        if self._step != BookingStep.LOCATION:
            return False
        self._draft = BookingDraft(date=self._today())
        for observer in self._observers:
            observer.draft_discarded()
        self._logger.info("Booking cancelled", extra={"step": self._step.title})
        self._navigator.go_to_marketing_site()
        return True

    def set_location(self, location: Location | None) -> None:
        if location == self._draft.location:
            return
        # coach availability depends on where and when
        self._update(replace(self._draft, location=location, time_slot=None, coach=None, payment=None))

    def set_date(self, day: date | datetime | None) -> None:
        if isinstance(day, datetime):
            day = day.date()
        if day == self._draft.date:
            return
        self._update(replace(self._draft, date=day, time_slot=None, coach=None, payment=None))

    def set_time_slot(self, slot: TimeSlot | None) -> bool:
        if self._confirmed or (slot is not None and not slot.available):
            return False
        self._update(replace(self._draft, time_slot=slot))
        return True

    def set_coach(self, coach: CoachCandidate | None) -> bool:
        if self._confirmed or (coach is not None and coach.is_unavailable):
            return False
        if coach != self._draft.coach:
            # the quote is priced from the coach
            self._update(replace(self._draft, coach=coach, payment=None))
        return True

    def set_player(self, player: PlayerDetails | None) -> None:
        self._update(replace(self._draft, player=player))

    def set_payment(self, payment: PaymentConfirmation | None) -> None:
        self._update(replace(self._draft, payment=payment))

    def _update(self, draft: BookingDraft) -> None:
        if self._confirmed or draft == self._draft:
            return
        self._draft = draft
        for observer in self._observers:
            observer.draft_changed(draft)

    def _enter_confirmation(self) -> None:
        self._confirmed = True
        for observer in self._observers:
            observer.draft_discarded()
        self._scheduler(self._redirect_delay_seconds, self._hand_off_to_dashboard)

    def _hand_off_to_dashboard(self) -> None:
        if self._handed_off:
            return
        self._handed_off = True
        self._navigator.go_to_dashboard()


class DraftAutosave(DraftObserver):
    """Writes a snapshot of the draft to client storage on every change."""

    def __init__(self, store: DraftStorePort, key: str = DRAFT_STORAGE_KEY) -> None:
        self._store = store
        self._key = key
        self._logger = logging.getLogger(__name__)

    def attach(self, wizard: BookingWizard, today: date) -> bool:
        """Restore a saved draft into the wizard, then keep saving. True if something was restored."""
        restored = self.load(today)
        if restored is not None:
            wizard.restore(restored)
        wizard.add_observer(self)
        self.draft_changed(wizard.draft)
        return restored is not None

    def load(self, today: date) -> BookingDraft | None:
        try:
            snapshot = self._store.load(self._key)
            if snapshot is None:
                return None
            return draft_from_snapshot(snapshot, default_date=today)
        except Exception as e:
            self._logger.error("Error loading saved booking data", extra={"error": str(e)})
            return None

    def draft_changed(self, draft: BookingDraft) -> None:
        try:
            self._store.save(draft_to_snapshot(draft), self._key)
        except Exception as e:
            self._logger.error("Error saving booking data", extra={"error": str(e)})

    def draft_discarded(self) -> None:
        try:
            self._store.clear(self._key)
        except Exception as e:
            self._logger.error("Error clearing booking data", extra={"error": str(e)})
