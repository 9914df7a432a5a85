"""
Seat allocation per event date.

Each (event_id, event_date) bucket owns a set of occupied seat numbers in
[1, capacity]. Allocation always hands out the lowest free number, so a seat
released by a cancellation is the next one reused.
"""

from typing import Optional

from ticketing.core.logging import get_logger

logger = get_logger(__name__)

MAX_SEAT = 100

BucketKey = tuple[int, str]


class SeatAllocator:
    def __init__(self, capacity: int = MAX_SEAT) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._occupied: dict[BucketKey, set[int]] = {}

    def _seats(self, event_id: int, event_date: str) -> set[int]:
        return self._occupied.setdefault((event_id, event_date), set())

    def allocate(self, event_id: int, event_date: str) -> Optional[int]:
        """
        Mark the lowest free seat as occupied and return it.
        Returns None when the event date is sold out.
        """
        occupied = self._seats(event_id, event_date)
        for seat in range(1, self.capacity + 1):
            if seat not in occupied:
                occupied.add(seat)
                return seat

        logger.info("seats_exhausted", event_id=event_id, event_date=event_date, capacity=self.capacity)
        return None

    def release(self, event_id: int, event_date: str, seat_number: int) -> None:
        """Free a seat. Releasing a seat that is not held is a no-op."""
        occupied = self._occupied.get((event_id, event_date))
        if occupied is not None:
            occupied.discard(seat_number)

    def occupied(self, event_id: int, event_date: str) -> frozenset[int]:
        return frozenset(self._occupied.get((event_id, event_date), ()))

    def available(self, event_id: int, event_date: str) -> int:
        return self.capacity - len(self._occupied.get((event_id, event_date), ()))
