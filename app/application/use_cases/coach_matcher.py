from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

from app.application.ports.backend import BackendQueryPort, Query
from app.application.utils.dates import sunday_based_weekday
from app.application.utils.fallback_data import FALLBACK_COACHES
from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location


ALL_SPECIALTIES = "all"
DEFAULT_PRICE = 75.0

COACH_COLUMNS = (
    "id, bio, avatar_url, hourly_rate, certifications, specialization, specialties, "
    "current_club, locations_served, experience_years, rating, review_count, "
    "user_profiles!coaches_id_fkey(full_name, is_active)"
)


def match_coaches(candidates: Sequence[CoachCandidate], specialty_filter: str | None) -> list[CoachCandidate]:
    """
    Filter candidates by specialty, keeping input order.

    Matching is a case-insensitive substring test so a coarse filter such as
    "finish" also matches "Finishing".
    """
    if not specialty_filter or specialty_filter.strip().lower() == ALL_SPECIALTIES:
        return list(candidates)
    needle = specialty_filter.strip().lower()
    return [
        coach
        for coach in candidates
        if any(needle in specialty.lower() for specialty in coach.specialties)
    ]


class CoachDirectory:
    """Loads coach candidates for the coach step. Never comes back empty-handed on errors."""

    def __init__(
        self,
        backend: BackendQueryPort,
        fallback_roster: Iterable[CoachCandidate] = FALLBACK_COACHES,
    ) -> None:
        self._backend = backend
        self._fallback_roster = tuple(fallback_roster)
        self._logger = logging.getLogger(__name__)

    def fetch_candidates(self, day: date | None = None, location: Location | None = None) -> list[CoachCandidate]:
        try:
            result = self._backend.execute(
                Query("coaches").select(COACH_COLUMNS).eq("user_profiles.is_active", True)
            )
            if result.error:
                self._logger.warning("Error fetching coaches", extra={"table": "coaches", "error": result.error})
                return list(self._fallback_roster)

            records = result.rows
            if not records:
                self._logger.warning("No coaches returned, using built-in roster", extra={"table": "coaches"})
                return list(self._fallback_roster)

            available = records
            if day is not None and location is not None:
                coach_ids = self._available_coach_ids(day, location)
                if coach_ids:
                    available = [record for record in records if str(record.get("id")) in coach_ids]

            if not available and day is not None and location is not None:
                # nobody free in this context: show everyone as "see other times"
                return [_to_candidate(record, unavailable=True) for record in records]
            return [_to_candidate(record) for record in available]
        except Exception as e:
            self._logger.error("Error fetching coaches", extra={"error": str(e)})
            return list(self._fallback_roster)

    def _available_coach_ids(self, day: date, location: Location) -> set[str]:
        try:
            result = self._backend.execute(
                Query("coach_availability")
                .select("coach_id, location")
                .eq("is_active", True)
                .eq("day_of_week", sunday_based_weekday(day))
            )
        except Exception as e:
            self._logger.error("Error checking availability", extra={"error": str(e)})
            return set()
        if result.error:
            self._logger.warning(
                "Error checking availability",
                extra={"table": "coach_availability", "error": result.error},
            )
            return set()
        return {
            str(row["coach_id"])
            for row in result.rows
            if row.get("coach_id") is not None and location.matches_label(row.get("location"))
        }


def _to_candidate(record: dict[str, Any], unavailable: bool = False) -> CoachCandidate:
    profile = record.get("user_profiles") or {}
    if isinstance(profile, list):
        profile = profile[0] if profile else {}

    specialties = record.get("specialties")
    if not specialties:
        specialties = [record["specialization"]] if record.get("specialization") else ["General Training"]

    experience_years = record.get("experience_years")
    try:
        price = float(record.get("hourly_rate") or DEFAULT_PRICE)
    except (TypeError, ValueError):
        price = DEFAULT_PRICE

    return CoachCandidate(
        id=str(record.get("id")),
        name=profile.get("full_name") or "Unknown Coach",
        avatar_url=record.get("avatar_url"),
        rating=float(record.get("rating") or 4.8),
        review_count=int(record.get("review_count") or 0),
        specialties=tuple(specialties),
        experience_label=f"{experience_years}+ years" if experience_years else "5+ years",
        bio=record.get("bio")
        or "Experienced football coach dedicated to developing young talent with professional techniques and mentorship.",
        price_per_session=price,
        certifications=tuple(record.get("certifications") or ["Certified Coach"]),
        current_club=record.get("current_club") or "Empire Performance",
        locations_served=tuple(record.get("locations_served") or ["Multiple Locations"]),
        is_unavailable=unavailable,
    )
