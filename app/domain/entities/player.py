from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlayerDetails:
    name: str = ""
    athlete_id: str | None = None
    date_of_birth: str | None = None  # YYYY-MM-DD
    notes: str = ""
    is_new_athlete: bool = True

    @property
    def is_complete(self) -> bool:
        return bool(self.name.strip()) or bool(self.athlete_id)
