"""
Concert endpoints. Admin-facing create/delete plus public reads.
"""

from fastapi import APIRouter, Depends, status

from concert_booking.schemas.concert import (
    ConcertCreate,
    ConcertResponse,
    ConcertWithStatsResponse,
    MessageResponse,
)
from concert_booking.schemas.reservation import ReservationResponse
from concert_booking.services.concert_service import ConcertStore
from concert_booking.services.reservation_service import ReservationStore
from concert_booking.services.store_factory import get_concert_store, get_reservation_store

router = APIRouter(prefix="/concerts", tags=["Concerts"])


@router.post("", response_model=ConcertResponse, status_code=status.HTTP_201_CREATED)
async def create_concert(
    concert_data: ConcertCreate,
    concerts: ConcertStore = Depends(get_concert_store),
):
    """Create a concert with a fixed seat capacity."""
    return concerts.create(concert_data.name, concert_data.description, concert_data.seat)


@router.get("", response_model=list[ConcertResponse])
async def list_concerts(concerts: ConcertStore = Depends(get_concert_store)):
    """All concerts in creation order."""
    return concerts.find_all()


@router.get("/{concert_id}", response_model=ConcertResponse)
async def get_concert(concert_id: int, concerts: ConcertStore = Depends(get_concert_store)):
    return concerts.find_one(concert_id)


@router.get("/{concert_id}/stats", response_model=ConcertWithStatsResponse)
async def get_concert_stats(
    concert_id: int,
    reservations: ReservationStore = Depends(get_reservation_store),
):
    """Concert with live reserved/available seat counts."""
    stats = reservations.get_concert_stats(concert_id)
    return ConcertWithStatsResponse(
        **ConcertResponse.model_validate(stats.concert).model_dump(),
        reserved_count=stats.reserved_count,
        available_seats=stats.available_seats,
    )


@router.get("/{concert_id}/reservations", response_model=list[ReservationResponse])
async def list_concert_reservations(
    concert_id: int,
    reservations: ReservationStore = Depends(get_reservation_store),
):
    """Reservation history for a concert, cancelled ones included."""
    return reservations.get_reservations_by_concert_id(concert_id)


@router.delete("/{concert_id}", response_model=MessageResponse)
async def delete_concert(concert_id: int, concerts: ConcertStore = Depends(get_concert_store)):
    """Delete a concert. Existing reservations for it are kept."""
    concerts.remove(concert_id)
    return MessageResponse(message="Concert deleted successfully")
