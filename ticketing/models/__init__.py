from ticketing.models.event import Event
from ticketing.models.reservation import Reservation

__all__ = ["Event", "Reservation"]
