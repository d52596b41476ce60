"""
Store providers.
Process-wide store singletons, created at startup and discarded at shutdown.
Routes depend on the getters so tests can swap in fresh stores.
"""

from typing import Optional

from concert_booking.services.concert_service import ConcertStore
from concert_booking.services.reservation_service import ReservationStore

_concert_store: Optional[ConcertStore] = None
_reservation_store: Optional[ReservationStore] = None


def get_concert_store() -> ConcertStore:
    """Get concert store singleton."""
    global _concert_store
    if _concert_store is None:
        _concert_store = ConcertStore()
    return _concert_store


def get_reservation_store() -> ReservationStore:
    """Get reservation store singleton, bound to the concert store singleton."""
    global _reservation_store
    if _reservation_store is None:
        _reservation_store = ReservationStore(get_concert_store())
    return _reservation_store


def reset_stores() -> None:
    """Drop both singletons. All concerts and reservations are discarded."""
    global _concert_store, _reservation_store
    _concert_store = None
    _reservation_store = None
