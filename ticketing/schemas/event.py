"""
Pydantic schemas for event-related request/response validation.
"""

from pydantic import Field

from ticketing.schemas.base import CamelModel


class EventCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    event_dates: list[str] = Field(..., min_length=1)
    details: str = Field(..., min_length=1, max_length=1000)


class EventResponse(CamelModel):
    id: int
    name: str
    event_dates: list[str]
    details: str


class EventCreateResponse(CamelModel):
    message: str
    event: EventResponse
