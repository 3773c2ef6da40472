from __future__ import annotations

import logging
from datetime import date
from typing import Any

from app.application.ports.backend import BackendQueryPort, Query
from app.domain.entities.athlete import Athlete
from app.domain.entities.player import PlayerDetails


class PlayerDetailsService:
    """Athletes of a parent account, and the player details derived from them."""

    def __init__(self, backend: BackendQueryPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    def list_athletes(self, parent_id: str | None) -> list[Athlete]:
        if not parent_id:
            return []
        try:
            result = self._backend.execute(
                Query("athletes").select("*").eq("parent_id", parent_id).order("created_at", ascending=False)
            )
        except Exception as e:
            self._logger.error("Error fetching athletes", extra={"error": str(e)})
            return []
        if result.error:
            self._logger.warning("Error fetching athletes", extra={"table": "athletes", "error": result.error})
            return []
        return [_to_athlete(row) for row in result.rows]

    def create_athlete(
        self,
        parent_id: str | None,
        name: str,
        birth_date: date | str | None = None,
        notes: str | None = None,
    ) -> Athlete | None:
        """Store a new athlete. Returns None when input is incomplete or the insert fails."""
        name = (name or "").strip()
        if not name or not parent_id:
            return None
        if isinstance(birth_date, date):
            birth_date = birth_date.isoformat()
        payload = {
            "parent_id": parent_id,
            "name": name,
            "birth_date": birth_date or None,
            "notes": (notes or "").strip() or None,
        }
        try:
            result = self._backend.insert("athletes", [payload])
        except Exception as e:
            self._logger.error("Error creating athlete", extra={"error": str(e)})
            return None
        if result.error or not result.rows:
            self._logger.warning("Error creating athlete", extra={"table": "athletes", "error": result.error})
            return None
        return _to_athlete(result.rows[0])


def player_from_athlete(athlete: Athlete) -> PlayerDetails:
    return PlayerDetails(
        athlete_id=athlete.id,
        name=athlete.name,
        date_of_birth=athlete.birth_date,
        notes=athlete.notes or "",
        is_new_athlete=False,
    )


def player_from_manual_entry(name: str, date_of_birth: str | None = None, notes: str = "") -> PlayerDetails:
    # typing details by hand detaches the draft from any stored athlete
    return PlayerDetails(
        athlete_id=None,
        name=name,
        date_of_birth=date_of_birth,
        notes=notes,
        is_new_athlete=True,
    )


def _to_athlete(row: dict[str, Any]) -> Athlete:
    return Athlete(
        id=str(row.get("id")),
        parent_id=str(row.get("parent_id")),
        name=row.get("name") or "",
        birth_date=row.get("birth_date"),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )
