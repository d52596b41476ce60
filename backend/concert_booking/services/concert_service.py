"""
Concert store handling CRUD operations.

Source of truth for seat capacity. The store owns its collection and its
id counter; both are only touched while holding the store lock.
"""

import threading
from typing import Dict

from concert_booking.core.exceptions import InvalidCapacityError, NotFoundError
from concert_booking.core.logging import get_logger
from concert_booking.core.metrics import set_concert_count
from concert_booking.models.concert import Concert, utcnow

logger = get_logger(__name__)


class ConcertStore:
    def __init__(self):
        self._concerts: Dict[int, Concert] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, name: str, description: str, seat: int) -> Concert:
        """Create a concert with a fresh id. Ids are never reused, even after removal."""
        if seat < 1:
            raise InvalidCapacityError(f"Seat capacity must be positive, got {seat}")

        with self._lock:
            now = utcnow()
            concert = Concert(
                id=self._next_id,
                name=name,
                description=description,
                seat=seat,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._concerts[concert.id] = concert
            set_concert_count(len(self._concerts))

        logger.info("concert_created", concert_id=concert.id, name=concert.name, seats=concert.seat)
        return concert

    def find_all(self) -> list[Concert]:
        with self._lock:
            return list(self._concerts.values())

    def find_one(self, concert_id: int) -> Concert:
        with self._lock:
            concert = self._concerts.get(concert_id)

        if concert is None:
            raise NotFoundError(f"Concert with ID {concert_id} not found")
        return concert

    def remove(self, concert_id: int) -> None:
        """
        Hard-delete a concert.
        Reservations referencing it are left in place.
        """
        with self._lock:
            if concert_id not in self._concerts:
                raise NotFoundError(f"Concert with ID {concert_id} not found")
            del self._concerts[concert_id]
            set_concert_count(len(self._concerts))

        logger.info("concert_removed", concert_id=concert_id)

    def count(self) -> int:
        with self._lock:
            return len(self._concerts)
