"""
Tests for durable booking draft persistence.
"""

from __future__ import annotations

import json
import tempfile
from datetime import date
from pathlib import Path

from app.application.ports.draft_store import DRAFT_STORAGE_KEY
from app.application.use_cases.booking_wizard import BookingWizard, DraftAutosave
from app.application.use_cases.time_slots import degraded_slots
from app.application.utils.draft_snapshot import draft_from_snapshot, draft_to_snapshot
from app.application.utils.fallback_data import FALLBACK_COACHES, FALLBACK_LOCATIONS
from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.payment import PaymentConfirmation
from app.domain.entities.player import PlayerDetails
from app.infrastructure.navigation.recording_navigator import RecordingNavigator
from app.infrastructure.store.json_draft_store import JsonDraftStore

from conftest import LONDON, TODAY


NEXT_MONDAY = date(2025, 3, 17)


def _new_wizard() -> BookingWizard:
    return BookingWizard(navigator=RecordingNavigator(), today_provider=lambda: TODAY, scheduler=lambda *_: None)


def _full_draft() -> BookingDraft:
    slot = degraded_slots(NEXT_MONDAY, LONDON)[1]
    return BookingDraft(
        location=FALLBACK_LOCATIONS[0],
        date=NEXT_MONDAY,
        time_slot=slot,
        coach=FALLBACK_COACHES[0],
        player=PlayerDetails(name="Alex Smith", date_of_birth="2014-05-02", notes="Left footed"),
    )


def test_json_store_persistence():
    """Test that JSON store persists and retrieves a snapshot correctly."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonDraftStore(data_dir=tmpdir, namespace="client-1")

        assert store.load() is None
        store.save({"location": None, "date": "2025-03-17"})

        assert store.exists()
        assert store.load() == {"location": None, "date": "2025-03-17"}
        assert not list(Path(tmpdir, "client-1").glob("*.tmp"))

        store.clear()
        assert store.load() is None


def test_namespaces_are_isolated():
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonDraftStore(data_dir=tmpdir, namespace="a").save({"date": "2025-03-17"})
        assert JsonDraftStore(data_dir=tmpdir, namespace="b").load() is None


def test_corrupt_snapshot_reads_as_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir, "client-1")
        folder.mkdir()
        (folder / f"{DRAFT_STORAGE_KEY}.json").write_text("{not json", encoding="utf-8")

        assert JsonDraftStore(data_dir=tmpdir, namespace="client-1").load() is None


def test_snapshot_round_trip_keeps_selections():
    draft = _full_draft()
    restored = draft_from_snapshot(json.loads(json.dumps(draft_to_snapshot(draft))), default_date=TODAY)
    assert restored == draft


def test_payment_is_never_persisted():
    draft = BookingDraft(
        date=NEXT_MONDAY,
        payment=PaymentConfirmation(token="pi_123", brand="Visa", last4="4242", amount_minor=10800),
    )

    snapshot = draft_to_snapshot(draft)

    assert "payment" not in snapshot
    assert "4242" not in json.dumps(snapshot)


def test_snapshot_accepts_legacy_timestamp_dates():
    restored = draft_from_snapshot({"date": "2025-03-17T00:00:00.000Z"}, default_date=TODAY)
    assert restored.date == NEXT_MONDAY

    missing = draft_from_snapshot({"location": None}, default_date=TODAY)
    assert missing.date == TODAY


def test_draft_survives_restart():
    """A new wizard on the same storage picks up where the last one stopped."""
    with tempfile.TemporaryDirectory() as tmpdir:
        first = _new_wizard()
        assert DraftAutosave(JsonDraftStore(data_dir=tmpdir)).attach(first, TODAY) is False
        draft = _full_draft()
        first.set_location(draft.location)
        first.set_date(draft.date)
        first.set_time_slot(draft.time_slot)
        first.set_coach(draft.coach)
        first.set_player(draft.player)

        second = _new_wizard()
        assert DraftAutosave(JsonDraftStore(data_dir=tmpdir)).attach(second, TODAY) is True
        assert second.draft == draft


def test_unreadable_snapshot_starts_fresh():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonDraftStore(data_dir=tmpdir)
        store.save({"location": {"name": "missing id"}})

        wizard = _new_wizard()
        assert DraftAutosave(store).attach(wizard, TODAY) is False
        assert wizard.draft == BookingDraft(date=TODAY)
