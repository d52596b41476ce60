from concert_booking.schemas.concert import (
    ConcertCreate, ConcertResponse, ConcertWithStatsResponse, MessageResponse,
)
from concert_booking.schemas.reservation import (
    ReservationCreate, ReservationCancel, ReservationResponse,
)

__all__ = [
    "ConcertCreate", "ConcertResponse", "ConcertWithStatsResponse", "MessageResponse",
    "ReservationCreate", "ReservationCancel", "ReservationResponse",
]
