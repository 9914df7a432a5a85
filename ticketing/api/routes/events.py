"""
Event endpoints: create, list and fetch events.
"""

from fastapi import APIRouter, Depends, status

from ticketing.api.dependencies import get_ticket_service
from ticketing.schemas.event import EventCreate, EventCreateResponse, EventResponse
from ticketing.schemas.reservation import ErrorResponse
from ticketing.services.ticket_service import TicketService

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=EventCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    service: TicketService = Depends(get_ticket_service),
):
    """Create an event. Ids are assigned sequentially from 1."""
    event = service.create_event(event_data.name, event_data.event_dates, event_data.details)
    return EventCreateResponse(
        message="Event created successfully!",
        event=EventResponse.model_validate(event),
    )


@router.get("", response_model=list[EventResponse])
async def list_events_endpoint(service: TicketService = Depends(get_ticket_service)):
    return service.list_events()


@router.get("/{event_id}", response_model=EventResponse, responses={404: {"model": ErrorResponse}})
async def get_event_endpoint(
    event_id: int,
    service: TicketService = Depends(get_ticket_service),
):
    return service.get_event(event_id)
