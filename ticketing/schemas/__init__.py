from ticketing.schemas.event import EventCreate, EventResponse, EventCreateResponse
from ticketing.schemas.reservation import (
    ReserveRequest, ReservationLookup, ReservationResponse,
    ReserveResponse, ModifyResponse, MessageResponse, ErrorResponse,
)

__all__ = [
    "EventCreate", "EventResponse", "EventCreateResponse",
    "ReserveRequest", "ReservationLookup", "ReservationResponse",
    "ReserveResponse", "ModifyResponse", "MessageResponse", "ErrorResponse",
]
