from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    city: str | None = None
    venue: str | None = None
    address: str | None = None
    features: tuple[str, ...] = field(default_factory=tuple)

    def matches_label(self, label: str | None) -> bool:
        """Legacy availability rows reference venues by free-form name or city."""
        if not label:
            return False
        return label == self.name or (self.city is not None and label == self.city)
