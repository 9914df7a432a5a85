"""
Ticket service: reservation consistency across catalog, seats and store.

INVARIANTS
==========

For every (event_id, event_date) bucket:
  - the allocator's occupied set equals the seat numbers of the stored
    reservations
  - a seat number is held by at most one reservation
  - an email holds at most one reservation

Every mutation keeps the occupied set in step with the reservation list
instead of recomputing it. Checks run in a fixed order so the same bad
request always yields the same error:

  presence -> event exists -> date valid -> duplicate email -> capacity

All failures are raised as TicketingError subclasses before any state is
touched, so an operation either completes or leaves nothing behind.

Operations run under a single lock. The HTTP layer may call the service
from a worker thread pool, and each operation is a read-modify-write on a
bucket.
"""

import functools
import re
import threading
import time
from typing import Optional, Union

from ticketing.core.exceptions import CapacityError, Conflict, NotFound, TicketingError, ValidationError
from ticketing.core.logging import get_logger
from ticketing.core.metrics import (
    record_event_created,
    record_seats_occupied,
    record_ticket_operation,
    ticket_operation_latency,
)
from ticketing.models.event import Event
from ticketing.models.reservation import Reservation
from ticketing.schemas.reservation import ReservationLookup, ReserveRequest
from ticketing.services.event_catalog import EventCatalog
from ticketing.services.reservation_store import ReservationStore
from ticketing.services.seat_allocator import SeatAllocator

logger = get_logger(__name__)

RESERVE_FIELDS_REQUIRED = "Name, email, event ID, and event date are required."
LOOKUP_FIELDS_REQUIRED = "Email, event ID, and event date are required."
EMAIL_REQUIRED = "Email is required."
ATTENDEE_QUERY_INVALID = "Valid event ID and event date are required."
EVENT_NOT_FOUND = "Event not found."
INVALID_EVENT_DATE = "Invalid event date."
DUPLICATE_RESERVATION = "You already have a reservation for this event on this date."
NO_SEATS = "No seats available for this event on this date."
NO_RESERVATIONS_FOR_EMAIL = "No reservations found for this email."
NO_ATTENDEES = "No attendees found for this event on this date."
NO_RESERVATIONS_FOR_DATE = "No reservations found for this event on this date."
NO_RESERVATION_FOR_EMAIL = "No reservation found for this email on the given event and date."

RESERVED = "Reservation successful!"
CANCELLED = "Reservation cancelled successfully."
MODIFIED = "Seat reservation modified successfully."


def _instrumented(operation: str):
    """Serialize the call, time it and count its outcome."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            start = time.perf_counter()
            try:
                with self._lock:
                    result = func(self, *args, **kwargs)
            except TicketingError as exc:
                record_ticket_operation(operation, exc.kind)
                logger.info("ticket_operation_rejected", operation=operation, kind=exc.kind, reason=exc.message)
                raise
            finally:
                ticket_operation_latency.labels(operation=operation).observe(time.perf_counter() - start)
            record_ticket_operation(operation, "success")
            return result

        return wrapper

    return decorator


_NUMERIC_QUERY = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|[+-]?Infinity")


def _parse_event_id(value: Union[int, str, None]) -> Union[int, float, None]:
    """
    Read an event id from a query string the way a JSON client would:
    blank means 0, "1.0" means 1. Anything that is not a number gives None.
    Non-integral values are returned as floats and simply match no bucket.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return 0
    if not _NUMERIC_QUERY.fullmatch(text):
        return None
    number = float(text.replace("Infinity", "inf"))
    return int(number) if number.is_integer() else number


class TicketService:
    def __init__(
        self,
        catalog: EventCatalog,
        allocator: Optional[SeatAllocator] = None,
        store: Optional[ReservationStore] = None,
    ) -> None:
        self.catalog = catalog
        self.allocator = allocator or SeatAllocator()
        self.store = store or ReservationStore()
        self._lock = threading.Lock()

    def _publish_occupancy(self, event_id: int, event_date: str) -> None:
        record_seats_occupied(event_id, event_date, len(self.allocator.occupied(event_id, event_date)))

    # Events

    @_instrumented("create_event")
    def create_event(self, name: str, event_dates: list[str], details: str) -> Event:
        event = self.catalog.create_event(name, event_dates, details)
        record_event_created()
        return event

    @_instrumented("get_event")
    def get_event(self, event_id: int) -> Event:
        event = self.catalog.get_event(event_id)
        if event is None:
            raise NotFound(EVENT_NOT_FOUND)
        return event

    def list_events(self) -> list[Event]:
        with self._lock:
            return self.catalog.get_all_events()

    # Reservations

    @_instrumented("reserve")
    def reserve_ticket(self, request: ReserveRequest) -> dict:
        """
        Reserve the lowest free seat for an attendee on one event date.
        Returns {message, event_id, event_date, seat_number}.
        """
        if not (request.name and request.email and request.event_id and request.event_date):
            raise ValidationError(RESERVE_FIELDS_REQUIRED)

        event = self.catalog.get_event(request.event_id)
        if event is None:
            raise NotFound(EVENT_NOT_FOUND)

        if not event.has_date(request.event_date):
            raise ValidationError(INVALID_EVENT_DATE)

        if self.store.find_by_email(event.id, request.event_date, request.email):
            raise Conflict(DUPLICATE_RESERVATION)

        seat_number = self.allocator.allocate(event.id, request.event_date)
        if seat_number is None:
            raise CapacityError(NO_SEATS)

        reservation = Reservation(
            name=request.name,
            email=request.email,
            seat_number=seat_number,
            event_id=event.id,
            event_date=request.event_date,
        )
        self.store.add(reservation)
        self._publish_occupancy(event.id, request.event_date)

        logger.info(
            "reservation_created",
            event_id=event.id,
            event_date=request.event_date,
            seat_number=seat_number,
        )
        return {
            "message": RESERVED,
            "event_id": event.id,
            "event_date": request.event_date,
            "seat_number": seat_number,
        }

    @_instrumented("ticket_details")
    def get_ticket_details(self, email: Optional[str]) -> list[Reservation]:
        """All reservations held by an email, across every event and date."""
        if not email:
            raise ValidationError(EMAIL_REQUIRED)

        reservations = self.store.list_by_email(email)
        if not reservations:
            raise NotFound(NO_RESERVATIONS_FOR_EMAIL)
        return reservations

    @_instrumented("attendees")
    def get_all_attendees(self, event_id: Union[int, str, None], event_date: Optional[str]) -> list[Reservation]:
        parsed_id = _parse_event_id(event_id)
        if parsed_id is None or not event_date:
            raise ValidationError(ATTENDEE_QUERY_INVALID)

        attendees = self.store.list_for_date(parsed_id, event_date)
        if not attendees:
            raise NotFound(NO_ATTENDEES)
        return attendees

    def _find_reservation(self, request: ReservationLookup) -> Reservation:
        if not (request.email and request.event_id and request.event_date):
            raise ValidationError(LOOKUP_FIELDS_REQUIRED)

        if not self.store.has_bucket(request.event_id, request.event_date):
            raise NotFound(NO_RESERVATIONS_FOR_DATE)

        reservation = self.store.find_by_email(request.event_id, request.event_date, request.email)
        if reservation is None:
            raise NotFound(NO_RESERVATION_FOR_EMAIL)
        return reservation

    @_instrumented("cancel")
    def cancel_reservation(self, request: ReservationLookup) -> dict:
        reservation = self._find_reservation(request)

        self.store.remove(reservation.event_id, reservation.event_date, reservation.email)
        self.allocator.release(reservation.event_id, reservation.event_date, reservation.seat_number)
        self._publish_occupancy(reservation.event_id, reservation.event_date)

        logger.info(
            "reservation_cancelled",
            event_id=reservation.event_id,
            event_date=reservation.event_date,
            seat_number=reservation.seat_number,
        )
        return {"message": CANCELLED}

    @_instrumented("modify")
    def modify_reservation(self, request: ReservationLookup) -> dict:
        """
        Move a reservation to a different seat.

        The new seat is allocated while the old one is still held, so the
        reservation never lands back on its own seat. If the date is sold
        out nothing changes.
        """
        reservation = self._find_reservation(request)

        new_seat = self.allocator.allocate(reservation.event_id, reservation.event_date)
        if new_seat is None:
            raise CapacityError(NO_SEATS)

        old_seat = reservation.seat_number
        self.allocator.release(reservation.event_id, reservation.event_date, old_seat)
        reservation.seat_number = new_seat

        logger.info(
            "reservation_modified",
            event_id=reservation.event_id,
            event_date=reservation.event_date,
            old_seat=old_seat,
            new_seat=new_seat,
        )
        return {
            "message": MODIFIED,
            "event_id": reservation.event_id,
            "event_date": reservation.event_date,
            "new_seat_number": new_seat,
        }
