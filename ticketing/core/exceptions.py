"""
Error taxonomy for the ticketing core.

Every documented failure of a ticket operation is one of these kinds. Each
carries a fixed, client-facing message and the HTTP status the adapter
answers with.
"""


class TicketingError(Exception):
    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(TicketingError):
    """Missing or malformed input."""


class NotFound(TicketingError):
    """Referenced event, reservation or bucket does not exist."""

    status_code = 404


class Conflict(TicketingError):
    """Email already holds a reservation for the event date."""


class CapacityError(TicketingError):
    """Every seat for the event date is taken."""
