"""
Pytest fixtures for the ticketing core and an HTTP client.

Every test gets a fresh application and service, so no state leaks
between tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from ticketing.core.config import Settings
from ticketing.main import create_app
from ticketing.models.event import Event
from ticketing.services.event_catalog import EventCatalog
from ticketing.services.reservation_store import ReservationStore
from ticketing.services.seat_allocator import SeatAllocator
from ticketing.services.ticket_service import TicketService

CONCERT_DATES = ["2025-01-20", "2025-01-21"]


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="test", LOG_LEVEL="WARNING", _env_file=None)


@pytest.fixture
def catalog() -> EventCatalog:
    return EventCatalog()


@pytest.fixture
def ticket_service(catalog: EventCatalog) -> TicketService:
    return TicketService(catalog, SeatAllocator(), ReservationStore())


@pytest.fixture
def concert(ticket_service: TicketService) -> Event:
    """Event 1 with two bookable dates."""
    return ticket_service.create_event(
        "Music Concert", CONCERT_DATES, "A grand music concert."
    )


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest_asyncio.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to a fresh application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def test_event(client: AsyncClient) -> dict:
    """Create event 1 through the API."""
    response = await client.post("/events", json={
        "name": "Music Concert",
        "eventDates": CONCERT_DATES,
        "details": "A grand music concert.",
    })
    assert response.status_code == 201
    return response.json()["event"]
