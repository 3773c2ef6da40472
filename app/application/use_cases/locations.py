from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from app.application.ports.backend import BackendQueryPort, Query
from app.application.utils.fallback_data import FALLBACK_LOCATIONS
from app.domain.entities.location import Location


NAME_SEPARATOR = " — "


class LocationCatalog:
    def __init__(self, backend: BackendQueryPort, fallback: Iterable[Location] = FALLBACK_LOCATIONS) -> None:
        self._backend = backend
        self._fallback = tuple(fallback)
        self._logger = logging.getLogger(__name__)

    def list_locations(self) -> list[Location]:
        """Active venues ordered by name; the built-in venue list if the backend has none."""
        try:
            result = self._backend.execute(
                Query("locations")
                .select("id, name, address, facility_summary, is_active")
                .eq("is_active", True)
                .order("name")
            )
        except Exception as e:
            self._logger.error("Error fetching locations", extra={"error": str(e)})
            return list(self._fallback)

        if result.error or not result.rows:
            self._logger.warning(
                "Using fallback locations",
                extra={"table": "locations", "error": result.error or "empty"},
            )
            return list(self._fallback)
        return [_to_location(row, index) for index, row in enumerate(result.rows)]

    def get(self, location_id: str) -> Location | None:
        for location in self.list_locations():
            if location.id == location_id:
                return location
        return None


def _to_location(row: dict[str, Any], index: int) -> Location:
    name = row.get("name") or ""
    parts = name.split(NAME_SEPARATOR) if name else []
    features = [part.strip() for part in (row.get("facility_summary") or "").split(";") if part.strip()]
    address = row.get("address")
    return Location(
        id=str(row.get("id")),
        name=name,
        city=parts[0] if parts else f"Location {index + 1}",
        venue=parts[1] if len(parts) > 1 else (name or "Venue TBC"),
        address=address if address else "TBC",
        features=tuple(features or ["Professional facilities"]),
    )
