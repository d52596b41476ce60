"""
Pydantic schemas for reservation-related request/response validation.
"""

from datetime import datetime
from pydantic import Field

from concert_booking.models.reservation import ReservationStatus
from concert_booking.schemas.concert import CamelModel


class ReservationCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    concert_id: int


class ReservationCancel(CamelModel):
    user_id: str = Field(..., min_length=1)
    reservation_id: int


class ReservationResponse(CamelModel):
    id: int
    user_id: str
    concert_id: int
    status: ReservationStatus
    created_at: datetime
    updated_at: datetime
