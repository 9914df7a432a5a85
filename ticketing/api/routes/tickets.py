"""
Reservation endpoints: reserve, look up, cancel and modify seats.

Handlers are async and the service never awaits, so each operation runs to
completion on the event loop before the next request is handled.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ticketing.api.dependencies import get_ticket_service
from ticketing.schemas.reservation import (
    ErrorResponse,
    MessageResponse,
    ModifyResponse,
    ReservationLookup,
    ReservationResponse,
    ReserveRequest,
    ReserveResponse,
)
from ticketing.services.ticket_service import TicketService

router = APIRouter(tags=["Tickets"])

ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post("/reserve", response_model=ReserveResponse, responses=ERRORS)
async def reserve_ticket(
    request: Optional[ReserveRequest] = None,
    service: TicketService = Depends(get_ticket_service),
):
    """Reserve the lowest free seat for an attendee on one event date."""
    return service.reserve_ticket(request or ReserveRequest())


@router.get("/ticket", response_model=list[ReservationResponse], responses=ERRORS)
async def get_ticket_details(
    email: Optional[str] = Query(None),
    service: TicketService = Depends(get_ticket_service),
):
    """All reservations held by an email."""
    return service.get_ticket_details(email)


@router.get("/attendees", response_model=list[ReservationResponse], responses=ERRORS)
async def get_all_attendees(
    event_id: Optional[str] = Query(None, alias="eventId"),
    event_date: Optional[str] = Query(None, alias="eventDate"),
    service: TicketService = Depends(get_ticket_service),
):
    return service.get_all_attendees(event_id, event_date)


@router.delete("/cancel", response_model=MessageResponse, responses=ERRORS)
async def cancel_reservation(
    request: Optional[ReservationLookup] = None,
    service: TicketService = Depends(get_ticket_service),
):
    """Cancel a reservation and free its seat."""
    return service.cancel_reservation(request or ReservationLookup())


@router.put("/modify", response_model=ModifyResponse, responses=ERRORS)
async def modify_reservation(
    request: Optional[ReservationLookup] = None,
    service: TicketService = Depends(get_ticket_service),
):
    """Move a reservation to a new seat."""
    return service.modify_reservation(request or ReservationLookup())
