from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from app.application.use_cases.booking_wizard import BookingWizard
from app.infrastructure.navigation.recording_navigator import RecordingNavigator


LONDON = ZoneInfo("Europe/London")
TODAY = date(2025, 3, 10)  # a Monday, before the clocks change


class FakeScheduler:
    """Collects scheduled callbacks instead of starting timers."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, object]] = []

    def __call__(self, delay_seconds, callback):
        self.calls.append((delay_seconds, callback))
        return None

    def fire_all(self) -> None:
        for _, callback in list(self.calls):
            callback()


@pytest.fixture
def london() -> ZoneInfo:
    return LONDON


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def wizard(navigator, scheduler) -> BookingWizard:
    return BookingWizard(navigator=navigator, today_provider=lambda: TODAY, scheduler=scheduler)
