from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Athlete:
    id: str
    parent_id: str
    name: str
    birth_date: str | None = None
    notes: str | None = None
    created_at: str | None = None
