"""
In-memory reservation record.

seat_number is the only mutable field: modify moves the reservation to a
new seat in place.
"""

from dataclasses import dataclass


@dataclass
class Reservation:
    name: str
    email: str
    seat_number: int
    event_id: int
    event_date: str

    @property
    def bucket(self) -> tuple[int, str]:
        return (self.event_id, self.event_date)
