from .theaters.models import Theater, Seat, SeatCategory
from .tickets.models import Ticket

__all__ = ("Theater", "Seat", "SeatCategory", "Ticket")
