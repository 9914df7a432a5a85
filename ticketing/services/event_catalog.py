"""
Event catalog: owns event records and assigns sequential ids.
"""

from typing import Optional, Sequence

from ticketing.models.event import Event
from ticketing.core.logging import get_logger

logger = get_logger(__name__)


class EventCatalog:
    def __init__(self) -> None:
        self._events: list[Event] = []

    def create_event(self, name: str, event_dates: Sequence[str], details: str) -> Event:
        """Create an event with the next id (1 + highest id so far)."""
        next_id = max((event.id for event in self._events), default=0) + 1
        event = Event(id=next_id, name=name, event_dates=tuple(event_dates), details=details)
        self._events.append(event)

        logger.info("event_created", event_id=event.id, name=name, dates=len(event.event_dates))
        return event

    def get_event(self, event_id: int) -> Optional[Event]:
        for event in self._events:
            if event.id == event_id:
                return event

        logger.debug("event_not_found", event_id=event_id)
        return None

    def get_all_events(self) -> list[Event]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
