"""
Reservation store with concurrency-safe seat admission.

CONCURRENCY STRATEGY: One Lock per Store
========================================

Problem:
  Two requests for the last seat (or the same user twice) both run the
  duplicate check and the seat count before either inserts.
  Both pass, both insert. Result: overbooking or a double reservation.

Solution:
  The reservation store owns a single lock. `create` and `cancel` hold it
  across the whole read-check-write sequence:

  1. Resolve the concert (capacity) from the concert store
  2. Reject if the user already has an active reservation for the concert
  3. Reject if active reservations for the concert already fill every seat
  4. Insert the new reservation and advance the id counter

  Nothing inside the critical section awaits or does I/O, so the same lock
  is correct for async endpoints on one event loop and for threadpool
  workers alike.

  Lock order is always reservation lock -> concert lock. The concert store
  never takes the reservation lock.

Queries scan the whole collection. Duplicate and capacity checks are
evaluated against exactly the same data the insert sees.
"""

import threading
from typing import Dict

from concert_booking.core.exceptions import (
    CapacityExceededError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from concert_booking.core.logging import get_logger
from concert_booking.core.metrics import (
    admission_latency,
    record_cancellation,
    record_reservation_attempt,
)
from concert_booking.models.concert import ConcertStats, utcnow
from concert_booking.models.reservation import Reservation, ReservationStatus
from concert_booking.services.concert_service import ConcertStore

logger = get_logger(__name__)


class ReservationStore:
    def __init__(self, concert_store: ConcertStore):
        self._concert_store = concert_store
        self._reservations: Dict[int, Reservation] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, user_id: str, concert_id: int) -> Reservation:
        """
        Reserve one seat of a concert for a user.

        Conflict is checked before capacity, so a duplicate attempt on a full
        concert is reported as a conflict.
        """
        with self._lock, admission_latency.time():
            try:
                concert = self._concert_store.find_one(concert_id)
            except NotFoundError:
                record_reservation_attempt("not_found")
                raise

            if self._active_ids(user_id, concert_id):
                record_reservation_attempt("conflict")
                logger.warning(
                    "reservation_rejected",
                    reason="conflict",
                    user_id=user_id,
                    concert_id=concert_id,
                )
                raise ConflictError("User already has a reservation for this concert")

            reserved = self._active_count(concert_id)
            if reserved >= concert.seat:
                record_reservation_attempt("capacity_exceeded")
                logger.warning(
                    "reservation_rejected",
                    reason="capacity_exceeded",
                    user_id=user_id,
                    concert_id=concert_id,
                    seats=concert.seat,
                    reserved=reserved,
                )
                raise CapacityExceededError("No seats available for this concert")

            now = utcnow()
            reservation = Reservation(
                id=self._next_id,
                user_id=user_id,
                concert_id=concert_id,
                status=ReservationStatus.RESERVE,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._reservations[reservation.id] = reservation

        record_reservation_attempt("success")
        logger.info(
            "reservation_created",
            reservation_id=reservation.id,
            user_id=user_id,
            concert_id=concert_id,
            reserved=reserved + 1,
            seats=concert.seat,
        )
        return reservation

    def cancel(self, user_id: str, reservation_id: int) -> None:
        """Cancel a reservation owned by `user_id`, releasing its seat."""
        with self._lock:
            reservation = self._reservations.get(reservation_id)
            if reservation is None:
                record_cancellation("not_found")
                raise NotFoundError(f"Reservation with ID {reservation_id} not found")

            if reservation.user_id != user_id:
                record_cancellation("forbidden")
                logger.warning(
                    "reservation_cancel_rejected",
                    reason="forbidden",
                    reservation_id=reservation_id,
                    user_id=user_id,
                )
                raise ForbiddenError("You can only cancel your own reservations")

            try:
                cancelled = reservation.cancelled()
            except InvalidStateError:
                record_cancellation("invalid_state")
                logger.warning(
                    "reservation_cancel_rejected",
                    reason="invalid_state",
                    reservation_id=reservation_id,
                    user_id=user_id,
                )
                raise

            self._reservations[reservation_id] = cancelled

        record_cancellation("success")
        logger.info(
            "reservation_cancelled",
            reservation_id=reservation_id,
            user_id=user_id,
            concert_id=cancelled.concert_id,
        )

    def find_all(self) -> list[Reservation]:
        with self._lock:
            return list(self._reservations.values())

    def get_all_reservations(self) -> list[Reservation]:
        return self.find_all()

    def find_by_user_id(self, user_id: str) -> list[Reservation]:
        with self._lock:
            return [r for r in self._reservations.values() if r.user_id == user_id]

    def find_one(self, reservation_id: int) -> Reservation:
        with self._lock:
            reservation = self._reservations.get(reservation_id)

        if reservation is None:
            raise NotFoundError(f"Reservation with ID {reservation_id} not found")
        return reservation

    def get_reservation_count_by_concert_id(self, concert_id: int) -> int:
        with self._lock:
            return self._active_count(concert_id)

    def get_reservation_ids_by_user_and_concert(self, user_id: str, concert_id: int) -> list[int]:
        with self._lock:
            return self._active_ids(user_id, concert_id)

    def get_reservations_by_concert_id(self, concert_id: int) -> list[Reservation]:
        """All reservations for a concert, any status. Works for removed concerts too."""
        with self._lock:
            return [r for r in self._reservations.values() if r.concert_id == concert_id]

    def get_concert_stats(self, concert_id: int) -> ConcertStats:
        with self._lock:
            concert = self._concert_store.find_one(concert_id)
            return ConcertStats(concert=concert, reserved_count=self._active_count(concert_id))

    # Callers must hold self._lock

    def _active_count(self, concert_id: int) -> int:
        return sum(
            1
            for r in self._reservations.values()
            if r.concert_id == concert_id and r.is_active
        )

    def _active_ids(self, user_id: str, concert_id: int) -> list[int]:
        return [
            r.id
            for r in self._reservations.values()
            if r.user_id == user_id
            and r.concert_id == concert_id
            and r.is_active
        ]
