from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum

from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location
from app.domain.entities.payment import PaymentConfirmation
from app.domain.entities.player import PlayerDetails
from app.domain.entities.time_slot import TimeSlot


class BookingStep(IntEnum):
    LOCATION = 1
    DATE_TIME = 2
    COACH = 3
    PLAYER = 4
    PAYMENT = 5
    CONFIRMATION = 6

    @property
    def title(self) -> str:
        return _STEP_TITLES[self]


_STEP_TITLES = {
    BookingStep.LOCATION: "Location",
    BookingStep.DATE_TIME: "Date & Time",
    BookingStep.COACH: "Coach",
    BookingStep.PLAYER: "Player Details",
    BookingStep.PAYMENT: "Payment",
    BookingStep.CONFIRMATION: "Confirmation",
}


@dataclass(frozen=True)
class BookingDraft:
    location: Location | None = None
    date: date | None = None
    time_slot: TimeSlot | None = None
    coach: CoachCandidate | None = None
    player: PlayerDetails | None = None
    payment: PaymentConfirmation | None = None
