from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.v1.schemas import (
    AthleteSchema,
    CalendarResponseSchema,
    CoachSchema,
    CreateAthleteRequestSchema,
    CreateSessionRequestSchema,
    DraftSchema,
    LocationSchema,
    NavigateMonthRequestSchema,
    PaymentConfirmationSchema,
    PaymentRequestSchema,
    PaymentResponseSchema,
    PlayerRequestSchema,
    PlayerSchema,
    QuoteSchema,
    SelectCoachRequestSchema,
    SelectDateRequestSchema,
    SelectLocationRequestSchema,
    SelectTimeSlotRequestSchema,
    SessionStateSchema,
    TimeSlotSchema,
)
from app.application.exceptions import BookingSessionNotFound, SelectionNotFound, SelectionRejected
from app.application.use_cases.booking_session import BookingSession
from app.application.use_cases.locations import LocationCatalog
from app.application.use_cases.player_details import PlayerDetailsService
from app.application.utils.fallback_data import SPECIALTIES
from app.domain.entities.booking_draft import BookingStep
from app.domain.entities.payment import CardDetails
from app.infrastructure.store.session_registry import BookingSessionRegistry
from app.wiring.dependencies import (
    get_location_catalog,
    get_player_details_service,
    get_session_registry,
)


router = APIRouter()
logger = logging.getLogger(__name__)


def _session(session_id: str, registry: BookingSessionRegistry) -> BookingSession:
    try:
        return registry.get(session_id)
    except BookingSessionNotFound:
        raise HTTPException(status_code=404, detail="Booking session not found")


def _state(session: BookingSession) -> SessionStateSchema:
    wizard = session.wizard
    draft = wizard.draft
    return SessionStateSchema(
        session_id=session.session_id,
        current_step=int(wizard.current_step),
        step_title=wizard.current_step.title,
        total_steps=wizard.TOTAL_STEPS,
        can_proceed=wizard.can_proceed_to_next(),
        next_button_text=wizard.next_button_text,
        show_cancel=wizard.current_step == BookingStep.LOCATION,
        confirmed=wizard.is_confirmed,
        restored=session.restored,
        redirect_to=session.redirect_to,
        draft=DraftSchema(
            location=LocationSchema.from_entity(draft.location) if draft.location else None,
            date=draft.date,
            time_slot=TimeSlotSchema.from_entity(draft.time_slot) if draft.time_slot else None,
            coach=CoachSchema.from_entity(draft.coach) if draft.coach else None,
            player=PlayerSchema.from_entity(draft.player) if draft.player else None,
            payment=PaymentConfirmationSchema.from_entity(draft.payment) if draft.payment else None,
        ),
    )


def _parse_month(month: str) -> date:
    try:
        year, month_number = (int(part) for part in month.split("-"))
        return date(year, month_number, 1)
    except ValueError:
        raise HTTPException(status_code=400, detail="month must look like YYYY-MM")


@router.get("/locations", response_model=list[LocationSchema])
def list_locations(catalog: LocationCatalog = Depends(get_location_catalog)):
    return [LocationSchema.from_entity(location) for location in catalog.list_locations()]


@router.get("/specialties", response_model=list[str])
def list_specialties():
    return list(SPECIALTIES)


@router.get("/athletes", response_model=list[AthleteSchema])
def list_athletes(
    parent_id: str = Query(...),
    players: PlayerDetailsService = Depends(get_player_details_service),
):
    return [AthleteSchema.from_entity(athlete) for athlete in players.list_athletes(parent_id)]


@router.post("/athletes", response_model=AthleteSchema, status_code=201)
def create_athlete(
    req: CreateAthleteRequestSchema,
    players: PlayerDetailsService = Depends(get_player_details_service),
):
    athlete = players.create_athlete(req.parent_id, req.name, req.birth_date, req.notes)
    if athlete is None:
        raise HTTPException(status_code=502, detail="Could not create athlete")
    return AthleteSchema.from_entity(athlete)


@router.post("/sessions", response_model=SessionStateSchema, status_code=201)
def create_session(
    req: CreateSessionRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    try:
        session = registry.create(req.session_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Booking session started", extra={"session_id": session.session_id})
    return _state(session)


@router.get("/sessions/{session_id}", response_model=SessionStateSchema)
def get_session(session_id: str, registry: BookingSessionRegistry = Depends(get_session_registry)):
    return _state(_session(session_id, registry))


@router.put("/sessions/{session_id}/location", response_model=SessionStateSchema)
def select_location(
    session_id: str,
    req: SelectLocationRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    try:
        session.select_location(req.location_id)
    except SelectionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _state(session)


@router.get("/sessions/{session_id}/calendar", response_model=CalendarResponseSchema)
def get_calendar(
    session_id: str,
    month: str | None = Query(None, description="YYYY-MM; defaults to the month on display"),
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    if month:
        session.calendar.show_month(_parse_month(month))
    dates = session.calendar.refresh_available_dates()
    return CalendarResponseSchema(month=session.calendar.current_month, available_dates=sorted(dates))


@router.post("/sessions/{session_id}/calendar/navigate", response_model=CalendarResponseSchema)
def navigate_calendar(
    session_id: str,
    req: NavigateMonthRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    if req.direction and session.calendar.navigate_month(req.direction):
        session.calendar.refresh_available_dates()
    return CalendarResponseSchema(
        month=session.calendar.current_month,
        available_dates=sorted(session.calendar.available_dates),
    )


@router.put("/sessions/{session_id}/date", response_model=list[TimeSlotSchema])
def select_date(
    session_id: str,
    req: SelectDateRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    try:
        slots = session.calendar.select_date(req.date)
    except SelectionRejected as e:
        raise HTTPException(status_code=409, detail=str(e))
    return [TimeSlotSchema.from_entity(slot) for slot in slots]


@router.get("/sessions/{session_id}/time-slots", response_model=list[TimeSlotSchema])
def list_time_slots(session_id: str, registry: BookingSessionRegistry = Depends(get_session_registry)):
    session = _session(session_id, registry)
    return [TimeSlotSchema.from_entity(slot) for slot in session.calendar.refresh_time_slots()]


@router.put("/sessions/{session_id}/time-slot", response_model=SessionStateSchema)
def select_time_slot(
    session_id: str,
    req: SelectTimeSlotRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    if not session.calendar.time_slots:
        session.calendar.refresh_time_slots()
    try:
        session.calendar.select_time_slot(req.slot_id)
    except SelectionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SelectionRejected as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session)


@router.get("/sessions/{session_id}/coaches", response_model=list[CoachSchema])
def list_coaches(
    session_id: str,
    specialty: str = Query("all"),
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    return [CoachSchema.from_entity(coach) for coach in session.coach_candidates(specialty)]


@router.put("/sessions/{session_id}/coach", response_model=SessionStateSchema)
def select_coach(
    session_id: str,
    req: SelectCoachRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    try:
        session.select_coach(req.coach_id)
    except SelectionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SelectionRejected as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session)


@router.put("/sessions/{session_id}/player", response_model=SessionStateSchema)
def set_player(
    session_id: str,
    req: PlayerRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    if req.athlete_id:
        if not req.parent_id:
            raise HTTPException(status_code=400, detail="parent_id is required to pick a stored athlete")
        try:
            session.select_athlete(req.parent_id, req.athlete_id)
        except SelectionNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
    else:
        session.enter_player(req.name, req.date_of_birth, req.notes)
    return _state(session)


@router.get("/sessions/{session_id}/quote", response_model=QuoteSchema)
def get_quote(session_id: str, registry: BookingSessionRegistry = Depends(get_session_registry)):
    session = _session(session_id, registry)
    return QuoteSchema.from_entity(session.payments.quote(session.wizard))


@router.post("/sessions/{session_id}/payment", response_model=PaymentResponseSchema)
def submit_payment(
    session_id: str,
    req: PaymentRequestSchema,
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    session = _session(session_id, registry)
    card = CardDetails(
        number=req.card_number,
        expiry=req.expiry,
        cvv=req.cvv,
        cardholder_name=req.cardholder_name,
        billing_postcode=req.billing_postcode,
    )
    outcome = session.submit_payment(card, req.accepted_terms)
    return PaymentResponseSchema(
        success=outcome.success,
        errors=outcome.errors,
        confirmation=PaymentConfirmationSchema.from_entity(outcome.confirmation) if outcome.confirmation else None,
        state=_state(session),
    )


@router.post("/sessions/{session_id}/next", response_model=SessionStateSchema)
def next_step(session_id: str, registry: BookingSessionRegistry = Depends(get_session_registry)):
    session = _session(session_id, registry)
    session.wizard.handle_next()
    if session.is_finished:
        registry.discard(session_id)
        logger.info("Booking handed off", extra={"session_id": session_id})
    return _state(session)


@router.post("/sessions/{session_id}/previous", response_model=SessionStateSchema)
def previous_step(session_id: str, registry: BookingSessionRegistry = Depends(get_session_registry)):
    session = _session(session_id, registry)
    session.wizard.handle_previous()
    return _state(session)


@router.post("/sessions/{session_id}/cancel", response_model=SessionStateSchema)
def cancel_session(session_id: str, registry: BookingSessionRegistry = Depends(get_session_registry)):
    session = _session(session_id, registry)
    if session.wizard.handle_cancel():
        registry.discard(session_id)
        logger.info("Booking session cancelled", extra={"session_id": session_id})
    return _state(session)
