"""
Reservation endpoints. The core enforces every reservation rule;
these routes only shape requests and responses.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from concert_booking.schemas.concert import MessageResponse
from concert_booking.schemas.reservation import (
    ReservationCancel,
    ReservationCreate,
    ReservationResponse,
)
from concert_booking.services.reservation_service import ReservationStore
from concert_booking.services.store_factory import get_reservation_store

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    reservations: ReservationStore = Depends(get_reservation_store),
):
    """
    Reserve one seat.

    409 if the user already holds a seat for this concert,
    400 if the concert is full, 404 if the concert does not exist.
    """
    return reservations.create(reservation_data.user_id, reservation_data.concert_id)


@router.get("", response_model=list[ReservationResponse])
async def list_reservations(
    user_id: Optional[str] = Query(None, alias="userId"),
    reservations: ReservationStore = Depends(get_reservation_store),
):
    """All reservations, or only the given user's. An empty userId lists all."""
    if user_id:
        return reservations.find_by_user_id(user_id)
    return reservations.get_all_reservations()


@router.delete("/cancel", response_model=MessageResponse)
async def cancel_reservation(
    cancel_data: ReservationCancel,
    reservations: ReservationStore = Depends(get_reservation_store),
):
    """Cancel one of the caller's own reservations."""
    reservations.cancel(cancel_data.user_id, cancel_data.reservation_id)
    return MessageResponse(message="Reservation cancelled successfully")
