"""
Event Ticketing API - Main Application Entry Point

An in-memory ticketing service:
- Events with one or more bookable dates
- Lowest-free seat allocation per event date
- One reservation per email per event date
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticketing.core.config import Settings, get_settings
from ticketing.core.logging import setup_logging, get_logger
from ticketing.core.metrics import metrics_endpoint
from ticketing.api.router import api_router
from ticketing.api.middleware import RequestLoggingMiddleware
from ticketing.api.exception_handlers import register_exception_handlers
from ticketing.services.event_catalog import EventCatalog
from ticketing.services.reservation_store import ReservationStore
from ticketing.services.seat_allocator import SeatAllocator
from ticketing.services.ticket_service import TicketService


def build_ticket_service(settings: Settings) -> TicketService:
    return TicketService(
        catalog=EventCatalog(),
        allocator=SeatAllocator(capacity=settings.MAX_SEATS_PER_DATE),
        store=ReservationStore(),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application with its own, empty ticket service."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle: startup and shutdown hooks."""
        setup_logging(settings)
        logger = get_logger(__name__)

        logger.info(
            "application_starting",
            app=settings.APP_NAME,
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            max_seats_per_date=settings.MAX_SEATS_PER_DATE,
        )

        yield

        logger.info("application_shutdown")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="In-memory event ticketing API with lowest-free seat allocation",
        lifespan=lifespan,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.ticket_service = build_ticket_service(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for Docker and load balancers."""
        service: TicketService = app.state.ticket_service
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "events": len(service.catalog),
        }

    if settings.METRICS_ENABLED:
        @app.get("/metrics", tags=["Health"], include_in_schema=False)
        def metrics():
            return metrics_endpoint()

    return app


app = create_app()
