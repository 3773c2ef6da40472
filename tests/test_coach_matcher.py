"""
Tests for coach candidate loading and specialty filtering.
"""

from __future__ import annotations

from datetime import date

from app.application.use_cases.coach_matcher import CoachDirectory, match_coaches
from app.application.utils.fallback_data import FALLBACK_COACHES, FALLBACK_LOCATIONS
from app.infrastructure.backend.memory_backend import MemoryBackend
from app.infrastructure.backend.null_backend import NullBackend


LOCHWINNOCH = FALLBACK_LOCATIONS[0]
WEDNESDAY = date(2025, 3, 12)


def _coach_record(coach_id: str, name: str, specialties=None, active: bool = True) -> dict:
    return {
        "id": coach_id,
        "bio": None,
        "hourly_rate": 60,
        "specialties": specialties,
        "specialization": "Goalkeeping",
        "experience_years": 8,
        "user_profiles": {"full_name": name, "is_active": active},
    }


def test_substring_filter_is_case_insensitive():
    """A coarse filter such as "finish" matches "Finishing"."""
    names = [coach.name for coach in match_coaches(FALLBACK_COACHES, "finish")]
    assert names == ["Jack Haggerty", "Katie Lockwood"]

    assert [c.id for c in match_coaches(FALLBACK_COACHES, "FINISHING")] == ["jack-haggerty", "katie-lockwood"]


def test_all_returns_everyone_in_order():
    assert match_coaches(FALLBACK_COACHES, "all") == list(FALLBACK_COACHES)
    assert match_coaches(FALLBACK_COACHES, None) == list(FALLBACK_COACHES)


def test_unknown_specialty_matches_nobody():
    assert match_coaches(FALLBACK_COACHES, "underwater") == []


def test_no_backend_uses_built_in_roster():
    assert CoachDirectory(NullBackend()).fetch_candidates() == list(FALLBACK_COACHES)


def test_empty_coach_table_uses_built_in_roster():
    assert CoachDirectory(MemoryBackend()).fetch_candidates() == list(FALLBACK_COACHES)


def test_records_are_mapped_with_defaults():
    backend = MemoryBackend(
        {
            "coaches": [
                _coach_record("c1", "Robin Keeper"),
                _coach_record("c2", "Inactive Coach", active=False),
            ]
        }
    )

    candidates = CoachDirectory(backend).fetch_candidates()

    assert [c.name for c in candidates] == ["Robin Keeper"]
    coach = candidates[0]
    assert coach.specialties == ("Goalkeeping",)
    assert coach.experience_label == "8+ years"
    assert coach.price_per_session == 60.0
    assert coach.bio
    assert not coach.is_unavailable


def test_day_and_location_narrow_to_available_coaches():
    backend = MemoryBackend(
        {
            "coaches": [_coach_record("c1", "Robin Keeper"), _coach_record("c2", "Sam Striker", ["Finishing"])],
            "coach_availability": [
                {"coach_id": "c2", "day_of_week": 3, "location": "Lochwinnoch", "is_active": True},
                {"coach_id": "c1", "day_of_week": 3, "location": "Airdrie", "is_active": True},
            ],
        }
    )

    candidates = CoachDirectory(backend).fetch_candidates(WEDNESDAY, LOCHWINNOCH)

    assert [c.id for c in candidates] == ["c2"]


def test_nobody_free_marks_everyone_unavailable():
    backend = MemoryBackend(
        {
            "coaches": [_coach_record("c1", "Robin Keeper"), _coach_record("c2", "Sam Striker")],
            "coach_availability": [
                {"coach_id": "c9", "day_of_week": 3, "location": "Lochwinnoch", "is_active": True},
            ],
        }
    )

    candidates = CoachDirectory(backend).fetch_candidates(WEDNESDAY, LOCHWINNOCH)

    assert [c.id for c in candidates] == ["c1", "c2"]
    assert all(c.is_unavailable for c in candidates)


def test_coach_query_error_uses_built_in_roster():
    backend = MemoryBackend({"coaches": [_coach_record("c1", "Robin Keeper")]})
    backend.fail_table("coaches")

    assert CoachDirectory(backend).fetch_candidates() == list(FALLBACK_COACHES)
