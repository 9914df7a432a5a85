"""
In-memory event record.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Event:
    id: int
    name: str
    event_dates: tuple[str, ...] = field(default_factory=tuple)
    details: str = ""

    def has_date(self, event_date: str) -> bool:
        return event_date in self.event_dates
