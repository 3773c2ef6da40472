from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.application.exceptions import SelectionNotFound, SelectionRejected
from app.application.use_cases.booking_wizard import BookingWizard
from app.application.use_cases.calendar_step import CalendarStep
from app.application.use_cases.coach_matcher import CoachDirectory, match_coaches
from app.application.use_cases.locations import LocationCatalog
from app.application.use_cases.payment import PaymentOutcome, PaymentService
from app.application.use_cases.player_details import (
    PlayerDetailsService,
    player_from_athlete,
    player_from_manual_entry,
)
from app.application.ports.navigator import NavigatorPort
from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location
from app.domain.entities.payment import CardDetails
from app.domain.entities.player import PlayerDetails


@dataclass
class BookingSession:
    """One client's pass through the booking flow, with the step helpers it needs."""

    session_id: str
    wizard: BookingWizard
    calendar: CalendarStep
    locations: LocationCatalog
    coaches: CoachDirectory
    players: PlayerDetailsService
    payments: PaymentService
    navigator: NavigatorPort
    restored: bool = False

    def __post_init__(self) -> None:
        self._candidates: list[CoachCandidate] = []
        self._candidates_for: tuple[date | None, Location | None] | None = None
        self._payment_attempt = 0

    @property
    def redirect_to(self) -> str | None:
        return getattr(self.navigator, "redirect_to", None)

    @property
    def is_finished(self) -> bool:
        return self.wizard.handed_off

    def select_location(self, location_id: str) -> Location:
        location = self.locations.get(location_id)
        if location is None:
            raise SelectionNotFound(f"Unknown location {location_id}")
        self.wizard.set_location(location)
        return location

    def coach_candidates(self, specialty: str | None = "all") -> list[CoachCandidate]:
        draft = self.wizard.draft
        self._candidates = self.coaches.fetch_candidates(draft.date, draft.location)
        self._candidates_for = (draft.date, draft.location)
        return match_coaches(self._candidates, specialty)

    def select_coach(self, coach_id: str) -> CoachCandidate:
        # availability is per day and location
        draft = self.wizard.draft
        if not self._candidates or self._candidates_for != (draft.date, draft.location):
            self.coach_candidates()
        for coach in self._candidates:
            if coach.id != coach_id:
                continue
            if not self.wizard.set_coach(coach):
                raise SelectionRejected(f"Coach {coach.name} is not available at this time")
            return coach
        raise SelectionNotFound(f"Unknown coach {coach_id}")

    def select_athlete(self, parent_id: str, athlete_id: str) -> PlayerDetails:
        for athlete in self.players.list_athletes(parent_id):
            if athlete.id == athlete_id:
                player = player_from_athlete(athlete)
                self.wizard.set_player(player)
                return player
        raise SelectionNotFound(f"Unknown athlete {athlete_id}")

    def enter_player(self, name: str, date_of_birth: str | None = None, notes: str = "") -> PlayerDetails:
        player = player_from_manual_entry(name, date_of_birth, notes)
        self.wizard.set_player(player)
        return player

    def submit_payment(self, card: CardDetails, accepted_terms: bool) -> PaymentOutcome:
        """
        A retried request reuses the key of the attempt it repeats, so the
        gateway charges at most once per attempt. A failed attempt moves on
        to a fresh key so a corrected card is not answered with the old decline.
        """
        key = f"booking-{self.session_id}-{self._payment_attempt}"
        outcome = self.payments.submit(self.wizard, card, accepted_terms, idempotency_key=key)
        if not outcome.success and "payment" in outcome.errors:
            self._payment_attempt += 1
        return outcome
