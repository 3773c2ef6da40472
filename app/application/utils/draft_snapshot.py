from __future__ import annotations

from datetime import date, datetime
from typing import Any

from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location
from app.domain.entities.player import PlayerDetails
from app.domain.entities.time_slot import TimeSlot


def draft_to_snapshot(draft: BookingDraft) -> dict[str, Any]:
    """Serialize the persisted part of a draft. Payment is never written out."""
    return {
        "location": _location_to_dict(draft.location) if draft.location else None,
        "date": draft.date.isoformat() if draft.date else None,
        "timeSlot": _slot_to_dict(draft.time_slot) if draft.time_slot else None,
        "coach": _coach_to_dict(draft.coach) if draft.coach else None,
        "player": _player_to_dict(draft.player) if draft.player else None,
    }


def draft_from_snapshot(data: dict[str, Any], default_date: date) -> BookingDraft:
    """
    Rebuild a draft from a stored snapshot.
    Raises ValueError/KeyError/TypeError on a corrupt snapshot.
    """
    if not isinstance(data, dict):
        raise TypeError("snapshot must be an object")

    raw_date = data.get("date")
    restored_date = _parse_date(raw_date) if raw_date else default_date

    return BookingDraft(
        location=_location_from_dict(data["location"]) if data.get("location") else None,
        date=restored_date,
        time_slot=_slot_from_dict(data["timeSlot"]) if data.get("timeSlot") else None,
        coach=_coach_from_dict(data["coach"]) if data.get("coach") else None,
        player=_player_from_dict(data["player"]) if data.get("player") else None,
    )


def _parse_date(value: str) -> date:
    # older snapshots stored a full timestamp
    if "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return date.fromisoformat(value)


def _location_to_dict(location: Location) -> dict[str, Any]:
    return {
        "id": location.id,
        "name": location.name,
        "city": location.city,
        "venue": location.venue,
        "address": location.address,
        "features": list(location.features),
    }


def _location_from_dict(data: dict[str, Any]) -> Location:
    return Location(
        id=str(data["id"]),
        name=data["name"],
        city=data.get("city"),
        venue=data.get("venue"),
        address=data.get("address"),
        features=tuple(data.get("features") or ()),
    )


def _slot_to_dict(slot: TimeSlot) -> dict[str, Any]:
    return {
        "id": slot.id,
        "start": slot.start.isoformat(),
        "end": slot.end.isoformat(),
        "displayLabel": slot.display_label,
        "available": slot.available,
    }


def _slot_from_dict(data: dict[str, Any]) -> TimeSlot:
    return TimeSlot(
        id=str(data["id"]),
        start=datetime.fromisoformat(data["start"]),
        end=datetime.fromisoformat(data["end"]),
        display_label=data.get("displayLabel", ""),
        available=bool(data.get("available", True)),
    )


def _coach_to_dict(coach: CoachCandidate) -> dict[str, Any]:
    return {
        "id": coach.id,
        "name": coach.name,
        "avatarUrl": coach.avatar_url,
        "rating": coach.rating,
        "reviewCount": coach.review_count,
        "specialties": list(coach.specialties),
        "experienceLabel": coach.experience_label,
        "bio": coach.bio,
        "pricePerSession": coach.price_per_session,
        "certifications": list(coach.certifications),
        "currentClub": coach.current_club,
        "locationsServed": list(coach.locations_served),
        "isUnavailable": coach.is_unavailable,
    }


def _coach_from_dict(data: dict[str, Any]) -> CoachCandidate:
    return CoachCandidate(
        id=str(data["id"]),
        name=data["name"],
        avatar_url=data.get("avatarUrl"),
        rating=float(data.get("rating", 4.8)),
        review_count=int(data.get("reviewCount", 0)),
        specialties=tuple(data.get("specialties") or ()),
        experience_label=data.get("experienceLabel", "5+ years"),
        bio=data.get("bio", ""),
        price_per_session=float(data.get("pricePerSession", 75.0)),
        certifications=tuple(data.get("certifications") or ()),
        current_club=data.get("currentClub"),
        locations_served=tuple(data.get("locationsServed") or ()),
        is_unavailable=bool(data.get("isUnavailable", False)),
    )


def _player_to_dict(player: PlayerDetails) -> dict[str, Any]:
    return {
        "athleteId": player.athlete_id,
        "name": player.name,
        "dateOfBirth": player.date_of_birth,
        "notes": player.notes,
        "isNewAthlete": player.is_new_athlete,
    }


def _player_from_dict(data: dict[str, Any]) -> PlayerDetails:
    return PlayerDetails(
        athlete_id=data.get("athleteId"),
        name=data.get("name") or "",
        date_of_birth=data.get("dateOfBirth"),
        notes=data.get("notes") or "",
        is_new_athlete=bool(data.get("isNewAthlete", True)),
    )
