from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimeSlot:
    id: str
    start: datetime
    end: datetime
    display_label: str
    available: bool = True
