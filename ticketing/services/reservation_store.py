"""
Reservation storage keyed by (event_id, event_date).

Buckets are created on first use and kept once empty: "no bucket" and
"bucket without this email" are reported differently by the ticket service.
"""

from typing import Optional

from ticketing.models.reservation import Reservation

BucketKey = tuple[int, str]


class ReservationStore:
    def __init__(self) -> None:
        # insertion-ordered: list_by_email walks buckets in creation order
        self._buckets: dict[BucketKey, list[Reservation]] = {}

    def add(self, reservation: Reservation) -> None:
        self._buckets.setdefault(reservation.bucket, []).append(reservation)

    def has_bucket(self, event_id: int, event_date: str) -> bool:
        return (event_id, event_date) in self._buckets

    def find_by_email(self, event_id: int, event_date: str, email: str) -> Optional[Reservation]:
        for reservation in self._buckets.get((event_id, event_date), []):
            if reservation.email == email:
                return reservation
        return None

    def remove(self, event_id: int, event_date: str, email: str) -> Optional[Reservation]:
        bucket = self._buckets.get((event_id, event_date), [])
        for index, reservation in enumerate(bucket):
            if reservation.email == email:
                return bucket.pop(index)
        return None

    def list_for_date(self, event_id: int, event_date: str) -> list[Reservation]:
        return list(self._buckets.get((event_id, event_date), []))

    def list_by_email(self, email: str) -> list[Reservation]:
        return [
            reservation
            for bucket in self._buckets.values()
            for reservation in bucket
            if reservation.email == email
        ]
