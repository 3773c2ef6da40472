"""
End-to-end tests for the booking HTTP API.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.availability_resolver import AvailabilityResolver
from app.application.use_cases.booking_session import BookingSession
from app.application.use_cases.booking_wizard import BookingWizard, DraftAutosave
from app.application.use_cases.calendar_step import CalendarStep
from app.application.use_cases.coach_matcher import CoachDirectory
from app.application.use_cases.locations import LocationCatalog
from app.application.use_cases.payment import PaymentService
from app.application.use_cases.player_details import PlayerDetailsService
from app.application.use_cases.time_slots import TimeSlotService
from app.infrastructure.backend.memory_backend import MemoryBackend
from app.infrastructure.backend.null_backend import NullBackend
from app.infrastructure.navigation.recording_navigator import RecordingNavigator
from app.infrastructure.payments.mock_payments import MockPaymentGateway
from app.infrastructure.store.memory_draft_store import MemoryDraftStore
from app.infrastructure.store.session_registry import BookingSessionRegistry
from app.main import app
from app.wiring.dependencies import get_location_catalog, get_player_details_service, get_session_registry

from conftest import LONDON, TODAY


BASE = "/api/v1/bookings"


@pytest.fixture
def client(scheduler):
    backend = NullBackend()
    athletes = MemoryBackend()

    def build(session_id: str, restore: bool) -> BookingSession:
        resolver = AvailabilityResolver(backend, LONDON, today_provider=lambda: TODAY)
        navigator = RecordingNavigator()
        wizard = BookingWizard(navigator=navigator, today_provider=lambda: TODAY, scheduler=scheduler)
        DraftAutosave(MemoryDraftStore()).attach(wizard, TODAY)
        return BookingSession(
            session_id=session_id,
            wizard=wizard,
            calendar=CalendarStep(wizard, resolver, TimeSlotService(resolver), debounce_seconds=0),
            locations=LocationCatalog(backend),
            coaches=CoachDirectory(backend),
            players=PlayerDetailsService(athletes),
            payments=PaymentService(MockPaymentGateway()),
            navigator=navigator,
        )

    registry = BookingSessionRegistry(factory=build, has_snapshot=lambda session_id: False)
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_location_catalog] = lambda: LocationCatalog(backend)
    app.dependency_overrides[get_player_details_service] = lambda: PlayerDetailsService(athletes)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _start(client) -> str:
    response = client.post(f"{BASE}/sessions", json={})
    assert response.status_code == 201
    return response.json()["session_id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_locations_listed(client):
    ids = [loc["id"] for loc in client.get(f"{BASE}/locations").json()]
    assert ids == ["lochwinnoch", "airdrie", "east-kilbride", "glasgow-south"]


def test_specialties_start_with_all(client):
    specialties = client.get(f"{BASE}/specialties").json()
    assert specialties[0] == "all"
    assert "Finishing" in specialties


def test_new_session_state(client):
    response = client.post(f"{BASE}/sessions", json={"session_id": "family-42"})
    state = response.json()

    assert state["session_id"] == "family-42"
    assert state["current_step"] == 1
    assert state["step_title"] == "Location"
    assert state["total_steps"] == 6
    assert state["show_cancel"] is True
    assert state["can_proceed"] is False
    assert state["draft"]["date"] == TODAY.isoformat()


def test_invalid_session_id_rejected(client):
    assert client.post(f"{BASE}/sessions", json={"session_id": "../etc"}).status_code == 400


def test_unknown_session_is_404(client):
    assert client.get(f"{BASE}/sessions/missing").status_code == 404


def test_calendar_month(client):
    session_id = _start(client)

    response = client.get(f"{BASE}/sessions/{session_id}/calendar", params={"month": "2025-03"})
    body = response.json()

    assert body["month"] == "2025-03-01"
    assert body["available_dates"][0] == "2025-03-10"
    assert len(body["available_dates"]) == 16

    assert client.get(f"{BASE}/sessions/{session_id}/calendar", params={"month": "March"}).status_code == 400

    nav = client.post(f"{BASE}/sessions/{session_id}/calendar/navigate", json={"direction": 1}).json()
    assert nav["month"] == "2025-04-01"
    assert len(nav["available_dates"]) == 22


def test_unknown_selections(client):
    session_id = _start(client)

    assert client.put(f"{BASE}/sessions/{session_id}/location", json={"location_id": "mars"}).status_code == 404
    assert client.put(f"{BASE}/sessions/{session_id}/coach", json={"coach_id": "nobody"}).status_code == 404
    assert client.put(f"{BASE}/sessions/{session_id}/time-slot", json={"slot_id": "x"}).status_code == 404


def test_coach_specialty_filter(client):
    session_id = _start(client)

    coaches = client.get(f"{BASE}/sessions/{session_id}/coaches", params={"specialty": "finish"}).json()

    assert [coach["name"] for coach in coaches] == ["Jack Haggerty", "Katie Lockwood"]


def test_athletes_endpoints(client):
    created = client.post(f"{BASE}/athletes", json={"parent_id": "p1", "name": "Alex Smith", "birth_date": "2014-05-02"})
    assert created.status_code == 201

    listed = client.get(f"{BASE}/athletes", params={"parent_id": "p1"}).json()
    assert [a["name"] for a in listed] == ["Alex Smith"]

    session_id = _start(client)
    state = client.put(
        f"{BASE}/sessions/{session_id}/player",
        json={"parent_id": "p1", "athlete_id": created.json()["id"]},
    ).json()
    assert state["draft"]["player"]["is_new_athlete"] is False
    assert state["draft"]["player"]["name"] == "Alex Smith"


def test_cancel_from_first_step(client):
    session_id = _start(client)

    state = client.post(f"{BASE}/sessions/{session_id}/cancel").json()

    assert state["redirect_to"] == "/public-landing-page"
    assert client.get(f"{BASE}/sessions/{session_id}").status_code == 404


def test_full_booking_flow(client, scheduler):
    """Lochwinnoch, next Monday at 10:00 AM with Jack Haggerty for Alex Smith."""
    session_id = _start(client)
    url = f"{BASE}/sessions/{session_id}"

    state = client.put(f"{url}/location", json={"location_id": "lochwinnoch"}).json()
    assert state["can_proceed"] is True
    assert client.post(f"{url}/next").json()["current_step"] == 2

    slots = client.put(f"{url}/date", json={"date": "2025-03-17"}).json()
    assert len(slots) == 9
    assert slots[1]["display_label"] == "10:00 AM"
    state = client.put(f"{url}/time-slot", json={"slot_id": slots[1]["id"]}).json()
    assert state["draft"]["time_slot"]["display_label"] == "10:00 AM"
    assert client.post(f"{url}/next").json()["step_title"] == "Coach"

    state = client.put(f"{url}/coach", json={"coach_id": "jack-haggerty"}).json()
    assert state["draft"]["coach"]["name"] == "Jack Haggerty"
    assert client.post(f"{url}/next").json()["current_step"] == 4

    client.put(f"{url}/player", json={"name": "Alex Smith"})
    state = client.post(f"{url}/next").json()
    assert state["current_step"] == 5
    assert state["next_button_text"] == "Proceed to Payment"

    quote = client.get(f"{url}/quote").json()
    assert quote["total"] == 108.0

    rejected = client.post(
        f"{url}/payment",
        json={"card_number": "4242", "expiry": "12/30", "cvv": "123", "cardholder_name": "Pat Smith",
              "billing_postcode": "PA12 4AB", "accepted_terms": True},
    ).json()
    assert rejected["success"] is False
    assert "card_number" in rejected["errors"]

    paid = client.post(
        f"{url}/payment",
        json={"card_number": "4242 4242 4242 4242", "expiry": "12/30", "cvv": "123", "cardholder_name": "Pat Smith",
              "billing_postcode": "PA12 4AB", "accepted_terms": True},
    ).json()
    assert paid["success"] is True
    assert paid["confirmation"]["last4"] == "4242"
    assert paid["state"]["can_proceed"] is True

    state = client.post(f"{url}/next").json()
    assert state["current_step"] == 6
    assert state["confirmed"] is True
    assert state["next_button_text"] == "Complete Booking"
    assert state["show_cancel"] is False
    assert len(scheduler.calls) == 1

    assert client.post(f"{url}/previous").json()["current_step"] == 6

    state = client.post(f"{url}/next").json()
    assert state["redirect_to"] == "/parent-dashboard"
    assert client.get(url).status_code == 404


def test_unofferable_dates_conflict(client):
    session_id = _start(client)
    url = f"{BASE}/sessions/{session_id}"

    assert client.put(f"{url}/date", json={"date": "2025-03-03"}).status_code == 409
    assert client.put(f"{url}/date", json={"date": "2025-03-15"}).status_code == 409
    assert client.get(url).json()["draft"]["date"] == TODAY.isoformat()


def test_payment_requires_payment_step(client):
    session_id = _start(client)

    outcome = client.post(
        f"{BASE}/sessions/{session_id}/payment",
        json={"card_number": "4242 4242 4242 4242", "expiry": "12/30", "cvv": "123", "cardholder_name": "Pat Smith",
              "billing_postcode": "PA12 4AB", "accepted_terms": True},
    ).json()

    assert outcome["success"] is False
    assert "payment" in outcome["errors"]
    assert outcome["state"]["draft"]["payment"] is None
