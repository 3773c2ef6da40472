from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CoachCandidate:
    id: str
    name: str
    avatar_url: str | None = None
    rating: float = 4.8
    review_count: int = 0
    specialties: tuple[str, ...] = field(default_factory=tuple)
    experience_label: str = "5+ years"
    bio: str = ""
    price_per_session: float = 75.0
    certifications: tuple[str, ...] = field(default_factory=tuple)
    current_club: str | None = None
    locations_served: tuple[str, ...] = field(default_factory=tuple)
    is_unavailable: bool = False  # shown as "see other times", not selectable
