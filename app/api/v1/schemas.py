from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from app.domain.entities.athlete import Athlete
from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location
from app.domain.entities.payment import PaymentConfirmation, PaymentQuote
from app.domain.entities.player import PlayerDetails
from app.domain.entities.time_slot import TimeSlot


class LocationSchema(BaseModel):
    id: str
    name: str
    city: str | None = None
    venue: str | None = None
    address: str | None = None
    features: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, location: Location) -> LocationSchema:
        return cls(
            id=location.id,
            name=location.name,
            city=location.city,
            venue=location.venue,
            address=location.address,
            features=list(location.features),
        )


class TimeSlotSchema(BaseModel):
    id: str
    start: dt.datetime
    end: dt.datetime
    display_label: str
    available: bool

    @classmethod
    def from_entity(cls, slot: TimeSlot) -> TimeSlotSchema:
        return cls(
            id=slot.id,
            start=slot.start,
            end=slot.end,
            display_label=slot.display_label,
            available=slot.available,
        )


class CoachSchema(BaseModel):
    id: str
    name: str
    avatar_url: str | None = None
    rating: float
    review_count: int
    specialties: list[str] = Field(default_factory=list)
    experience_label: str
    bio: str
    price_per_session: float
    certifications: list[str] = Field(default_factory=list)
    current_club: str | None = None
    locations_served: list[str] = Field(default_factory=list)
    is_unavailable: bool = False

    @classmethod
    def from_entity(cls, coach: CoachCandidate) -> CoachSchema:
        return cls(
            id=coach.id,
            name=coach.name,
            avatar_url=coach.avatar_url,
            rating=coach.rating,
            review_count=coach.review_count,
            specialties=list(coach.specialties),
            experience_label=coach.experience_label,
            bio=coach.bio,
            price_per_session=coach.price_per_session,
            certifications=list(coach.certifications),
            current_club=coach.current_club,
            locations_served=list(coach.locations_served),
            is_unavailable=coach.is_unavailable,
        )


class PlayerSchema(BaseModel):
    athlete_id: str | None = None
    name: str = ""
    date_of_birth: str | None = None
    notes: str = ""
    is_new_athlete: bool = True

    @classmethod
    def from_entity(cls, player: PlayerDetails) -> PlayerSchema:
        return cls(
            athlete_id=player.athlete_id,
            name=player.name,
            date_of_birth=player.date_of_birth,
            notes=player.notes,
            is_new_athlete=player.is_new_athlete,
        )


class AthleteSchema(BaseModel):
    id: str
    parent_id: str
    name: str
    birth_date: str | None = None
    notes: str | None = None
    created_at: str | None = None

    @classmethod
    def from_entity(cls, athlete: Athlete) -> AthleteSchema:
        return cls(
            id=athlete.id,
            parent_id=athlete.parent_id,
            name=athlete.name,
            birth_date=athlete.birth_date,
            notes=athlete.notes,
            created_at=athlete.created_at,
        )


class PaymentConfirmationSchema(BaseModel):
    token: str
    brand: str
    last4: str
    amount_minor: int
    currency: str

    @classmethod
    def from_entity(cls, confirmation: PaymentConfirmation) -> PaymentConfirmationSchema:
        return cls(
            token=confirmation.token,
            brand=confirmation.brand,
            last4=confirmation.last4,
            amount_minor=confirmation.amount_minor,
            currency=confirmation.currency,
        )


class QuoteSchema(BaseModel):
    session_price: float
    setup_fee: float
    tax: float
    total: float
    currency: str

    @classmethod
    def from_entity(cls, quote: PaymentQuote) -> QuoteSchema:
        return cls(
            session_price=quote.session_price,
            setup_fee=quote.setup_fee,
            tax=quote.tax,
            total=quote.total,
            currency=quote.currency,
        )


class DraftSchema(BaseModel):
    location: LocationSchema | None = None
    date: dt.date | None = None
    time_slot: TimeSlotSchema | None = None
    coach: CoachSchema | None = None
    player: PlayerSchema | None = None
    payment: PaymentConfirmationSchema | None = None


class SessionStateSchema(BaseModel):
    session_id: str
    current_step: int
    step_title: str
    total_steps: int
    can_proceed: bool
    next_button_text: str
    show_cancel: bool
    confirmed: bool
    restored: bool
    redirect_to: str | None = None
    draft: DraftSchema


class CreateSessionRequestSchema(BaseModel):
    session_id: str | None = None


class SelectLocationRequestSchema(BaseModel):
    location_id: str


class SelectDateRequestSchema(BaseModel):
    date: dt.date


class SelectTimeSlotRequestSchema(BaseModel):
    slot_id: str


class SelectCoachRequestSchema(BaseModel):
    coach_id: str


class PlayerRequestSchema(BaseModel):
    parent_id: str | None = None
    athlete_id: str | None = None
    name: str = ""
    date_of_birth: str | None = None
    notes: str = ""


class CreateAthleteRequestSchema(BaseModel):
    parent_id: str
    name: str = Field(min_length=1)
    birth_date: dt.date | None = None
    notes: str | None = None


class NavigateMonthRequestSchema(BaseModel):
    direction: int = Field(ge=-1, le=1)


class CalendarResponseSchema(BaseModel):
    month: dt.date
    available_dates: list[dt.date]


class PaymentRequestSchema(BaseModel):
    card_number: str
    expiry: str
    cvv: str
    cardholder_name: str
    billing_postcode: str
    accepted_terms: bool = False


class PaymentResponseSchema(BaseModel):
    success: bool
    errors: dict[str, str] = Field(default_factory=dict)
    confirmation: PaymentConfirmationSchema | None = None
    state: SessionStateSchema
