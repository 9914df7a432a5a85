"""
Pydantic schemas for reservation requests and responses.

Request fields are all optional: presence is checked by the ticket service
so that a missing field produces its documented error message instead of a
generic schema error. Event ids must be JSON integers: booleans and numeric
strings never match an event.
"""

from typing import Optional

from pydantic import BaseModel, StrictInt

from ticketing.schemas.base import CamelModel


class ReserveRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    event_id: Optional[StrictInt] = None
    event_date: Optional[str] = None


class ReservationLookup(CamelModel):
    """Body of cancel and modify requests."""

    email: Optional[str] = None
    event_id: Optional[StrictInt] = None
    event_date: Optional[str] = None


class ReservationResponse(CamelModel):
    name: str
    email: str
    seat_number: int
    event_id: int
    event_date: str


class ReserveResponse(CamelModel):
    message: str
    event_id: int
    event_date: str
    seat_number: int


class ModifyResponse(CamelModel):
    message: str
    event_id: int
    event_date: str
    new_seat_number: int


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
