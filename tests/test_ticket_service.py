"""
Tests for reservation consistency in the ticket service.
"""

import pytest

from ticketing.core.exceptions import CapacityError, Conflict, NotFound, ValidationError
from ticketing.models.event import Event
from ticketing.schemas.reservation import ReservationLookup, ReserveRequest
from ticketing.services.event_catalog import EventCatalog
from ticketing.services.seat_allocator import MAX_SEAT, SeatAllocator
from ticketing.services.ticket_service import TicketService

DATE = "2025-01-20"


def reserve(service: TicketService, email: str = "john@example.com", name: str = "John Doe",
            event_id: int = 1, event_date: str = DATE) -> dict:
    return service.reserve_ticket(
        ReserveRequest(name=name, email=email, event_id=event_id, event_date=event_date)
    )


def lookup(email: str = "john@example.com", event_id: int = 1, event_date: str = DATE) -> ReservationLookup:
    return ReservationLookup(email=email, event_id=event_id, event_date=event_date)


def assert_consistent(service: TicketService, event_id: int = 1, event_date: str = DATE) -> None:
    """Occupied seats must mirror the stored reservations exactly."""
    reservations = service.store.list_for_date(event_id, event_date)
    seats = [r.seat_number for r in reservations]
    assert len(seats) == len(set(seats))
    assert service.allocator.occupied(event_id, event_date) == frozenset(seats)


def test_reserve_allocates_first_seat(ticket_service, concert: Event):
    result = reserve(ticket_service)

    assert result == {
        "message": "Reservation successful!",
        "event_id": 1,
        "event_date": DATE,
        "seat_number": 1,
    }


def test_seats_assigned_in_ascending_order(ticket_service, concert):
    seats = [reserve(ticket_service, email=f"guest{i}@example.com")["seat_number"] for i in range(10)]

    assert seats == list(range(1, 11))
    assert_consistent(ticket_service)


def test_same_email_twice_conflicts(ticket_service, concert):
    reserve(ticket_service)

    with pytest.raises(Conflict) as exc_info:
        reserve(ticket_service)
    assert exc_info.value.message == "You already have a reservation for this event on this date."


def test_same_email_on_other_date_is_allowed(ticket_service, concert):
    reserve(ticket_service)
    result = reserve(ticket_service, event_date="2025-01-21")
    assert result["seat_number"] == 1


@pytest.mark.parametrize("missing", ["name", "email", "event_id", "event_date"])
def test_missing_field_is_validation_error(ticket_service, concert, missing):
    fields = {"name": "John Doe", "email": "john@example.com", "event_id": 1, "event_date": DATE}
    fields[missing] = None

    with pytest.raises(ValidationError) as exc_info:
        ticket_service.reserve_ticket(ReserveRequest(**fields))
    assert exc_info.value.message == "Name, email, event ID, and event date are required."


def test_unknown_event_is_not_found(ticket_service, concert):
    with pytest.raises(NotFound) as exc_info:
        reserve(ticket_service, event_id=99)
    assert exc_info.value.message == "Event not found."
    assert exc_info.value.status_code == 404


def test_invalid_date_is_validation_error(ticket_service, concert):
    with pytest.raises(ValidationError) as exc_info:
        reserve(ticket_service, event_date="2025-12-31")
    assert exc_info.value.message == "Invalid event date."


def test_checks_presence_before_event(ticket_service, concert):
    with pytest.raises(ValidationError):
        ticket_service.reserve_ticket(ReserveRequest(name="John Doe", event_id=99, event_date=DATE))


def test_checks_duplicate_before_capacity(catalog):
    """A duplicate on a sold-out date reports the duplicate."""
    service = TicketService(catalog, SeatAllocator(capacity=1))
    service.create_event("Tiny Gig", [DATE], "One seat only.")
    reserve(service)

    with pytest.raises(Conflict):
        reserve(service)
    with pytest.raises(CapacityError):
        reserve(service, email="jane@example.com")


def test_capacity_exhausted_after_max_seats(ticket_service, concert):
    """Once every seat is taken the next distinct email is turned away."""
    for i in range(MAX_SEAT):
        reserve(ticket_service, email=f"guest{i}@example.com")

    with pytest.raises(CapacityError) as exc_info:
        reserve(ticket_service, email="late@example.com")
    assert exc_info.value.message == "No seats available for this event on this date."
    assert len(ticket_service.store.list_for_date(1, DATE)) == MAX_SEAT
    assert_consistent(ticket_service)


def test_ticket_details_across_dates(ticket_service, concert):
    reserve(ticket_service)
    reserve(ticket_service, email="jane@example.com", name="Jane Doe")
    reserve(ticket_service, event_date="2025-01-21")

    reservations = ticket_service.get_ticket_details("john@example.com")

    assert [(r.event_date, r.seat_number) for r in reservations] == [(DATE, 1), ("2025-01-21", 1)]


def test_ticket_details_requires_email(ticket_service):
    with pytest.raises(ValidationError) as exc_info:
        ticket_service.get_ticket_details("")
    assert exc_info.value.message == "Email is required."


def test_ticket_details_not_found(ticket_service, concert):
    with pytest.raises(NotFound) as exc_info:
        ticket_service.get_ticket_details("nobody@example.com")
    assert exc_info.value.message == "No reservations found for this email."


def test_attendees_in_reservation_order(ticket_service, concert):
    reserve(ticket_service)
    reserve(ticket_service, email="jane@example.com", name="Jane Doe")

    attendees = ticket_service.get_all_attendees("1", DATE)

    assert [(a.email, a.seat_number) for a in attendees] == [
        ("john@example.com", 1),
        ("jane@example.com", 2),
    ]


@pytest.mark.parametrize("event_id,event_date", [("abc", DATE), (None, DATE), ("1", None), ("1", "")])
def test_attendees_invalid_query(ticket_service, event_id, event_date):
    with pytest.raises(ValidationError) as exc_info:
        ticket_service.get_all_attendees(event_id, event_date)
    assert exc_info.value.message == "Valid event ID and event date are required."


def test_attendees_not_found(ticket_service, concert):
    with pytest.raises(NotFound) as exc_info:
        ticket_service.get_all_attendees(1, DATE)
    assert exc_info.value.message == "No attendees found for this event on this date."


def test_cancel_then_reserve_reuses_seat(ticket_service, concert):
    """Cancelled seat 1 goes to the next reservation."""
    assert reserve(ticket_service)["seat_number"] == 1
    with pytest.raises(Conflict):
        reserve(ticket_service)

    assert ticket_service.cancel_reservation(lookup()) == {"message": "Reservation cancelled successfully."}
    assert reserve(ticket_service)["seat_number"] == 1
    assert_consistent(ticket_service)


def test_cancel_in_full_bucket_frees_exact_seat(ticket_service, concert):
    for i in range(MAX_SEAT):
        reserve(ticket_service, email=f"guest{i}@example.com")

    ticket_service.cancel_reservation(lookup(email="guest41@example.com"))
    result = reserve(ticket_service, email="late@example.com")

    assert result["seat_number"] == 42
    assert_consistent(ticket_service)


def test_cancel_requires_fields(ticket_service):
    with pytest.raises(ValidationError) as exc_info:
        ticket_service.cancel_reservation(ReservationLookup(email="john@example.com", event_id=1))
    assert exc_info.value.message == "Email, event ID, and event date are required."


def test_cancel_without_bucket(ticket_service, concert):
    with pytest.raises(NotFound) as exc_info:
        ticket_service.cancel_reservation(lookup())
    assert exc_info.value.message == "No reservations found for this event on this date."


def test_cancel_unknown_email(ticket_service, concert):
    reserve(ticket_service)

    with pytest.raises(NotFound) as exc_info:
        ticket_service.cancel_reservation(lookup(email="jane@example.com"))
    assert exc_info.value.message == "No reservation found for this email on the given event and date."


def test_cancel_twice_reports_missing_reservation(ticket_service, concert):
    reserve(ticket_service)
    ticket_service.cancel_reservation(lookup())

    with pytest.raises(NotFound) as exc_info:
        ticket_service.cancel_reservation(lookup())
    assert exc_info.value.message == "No reservation found for this email on the given event and date."


def test_lone_reservation_moves_to_next_seat(ticket_service, concert):
    """The new seat is taken before the old one is released."""
    reserve(ticket_service)

    result = ticket_service.modify_reservation(lookup())

    assert result == {
        "message": "Seat reservation modified successfully.",
        "event_id": 1,
        "event_date": DATE,
        "new_seat_number": 2,
    }
    assert ticket_service.store.find_by_email(1, DATE, "john@example.com").seat_number == 2
    assert_consistent(ticket_service)


def test_modify_frees_old_seat_for_next_reservation(ticket_service, concert):
    reserve(ticket_service)
    ticket_service.modify_reservation(lookup())

    assert reserve(ticket_service, email="jane@example.com")["seat_number"] == 1
    assert_consistent(ticket_service)


def test_modify_takes_lowest_free_seat(ticket_service, concert):
    for i in range(3):
        reserve(ticket_service, email=f"guest{i}@example.com")
    ticket_service.cancel_reservation(lookup(email="guest0@example.com"))

    result = ticket_service.modify_reservation(lookup(email="guest2@example.com"))

    assert result["new_seat_number"] == 1
    assert_consistent(ticket_service)


def test_modify_when_full_changes_nothing(ticket_service, concert):
    """A sold-out date leaves the reservation on its old seat."""
    for i in range(MAX_SEAT):
        reserve(ticket_service, email=f"guest{i}@example.com")

    with pytest.raises(CapacityError):
        ticket_service.modify_reservation(lookup(email="guest0@example.com"))

    assert ticket_service.store.find_by_email(1, DATE, "guest0@example.com").seat_number == 1
    assert_consistent(ticket_service)


def test_modify_unknown_reservation(ticket_service, concert):
    with pytest.raises(NotFound):
        ticket_service.modify_reservation(lookup())

    reserve(ticket_service)
    with pytest.raises(NotFound):
        ticket_service.modify_reservation(lookup(email="jane@example.com"))


def test_get_event(ticket_service, concert):
    assert ticket_service.get_event(1) == concert


def test_get_missing_event(ticket_service):
    with pytest.raises(NotFound):
        ticket_service.get_event(5)


def test_list_events(ticket_service: TicketService, catalog: EventCatalog, concert):
    assert ticket_service.list_events() == [concert]


@pytest.mark.parametrize("event_id", ["1.0", " 1 ", "1e0", "+1"])
def test_attendees_numeric_query_forms(ticket_service, concert, event_id):
    """Any numeric spelling of 1 finds event 1's attendees."""
    reserve(ticket_service)

    attendees = ticket_service.get_all_attendees(event_id, DATE)
    assert [a.email for a in attendees] == ["john@example.com"]


@pytest.mark.parametrize("event_id", ["", "1.5", "Infinity"])
def test_attendees_numeric_query_without_match(ticket_service, concert, event_id):
    """Blank reads as 0; fractional and infinite ids are numbers that match nothing."""
    reserve(ticket_service)

    with pytest.raises(NotFound) as exc_info:
        ticket_service.get_all_attendees(event_id, DATE)
    assert exc_info.value.message == "No attendees found for this event on this date."


@pytest.mark.parametrize("event_id", [True, "inf", "nan", "0x1", "1_0"])
def test_attendees_rejects_non_numbers(ticket_service, event_id):
    with pytest.raises(ValidationError):
        ticket_service.get_all_attendees(event_id, DATE)
