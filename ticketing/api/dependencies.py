"""
FastAPI dependencies resolving per-application state.
"""

from fastapi import Request

from ticketing.services.ticket_service import TicketService


def get_ticket_service(request: Request) -> TicketService:
    return request.app.state.ticket_service
