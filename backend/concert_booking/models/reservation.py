"""
Reservation record and its lifecycle.

Key design decisions:
- Status field allows cancellation without deleting records
- A repeat reservation after cancellation is a new record with a new id
- Records are frozen; the owning store swaps in an updated copy on cancel
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Set

from concert_booking.core.exceptions import InvalidStateError
from concert_booking.models.concert import utcnow


class ReservationStatus(str, Enum):
    RESERVE = "RESERVE"
    CANCEL = "CANCEL"


class ReservationStateMachine:
    """
    Legal reservation status transitions.
    RESERVE is the initial state, CANCEL is terminal.
    """

    _ALLOWED_TRANSITIONS: Dict[ReservationStatus, Set[ReservationStatus]] = {
        ReservationStatus.RESERVE: {ReservationStatus.CANCEL},
        ReservationStatus.CANCEL: set(),
    }

    @classmethod
    def can_transition(
        cls,
        from_status: ReservationStatus,
        to_status: ReservationStatus,
    ) -> bool:
        return to_status in cls._ALLOWED_TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(
        cls,
        from_status: ReservationStatus,
        to_status: ReservationStatus,
    ) -> None:
        """
        Raises InvalidStateError if transition is illegal.
        """
        if not cls.can_transition(from_status, to_status):
            if from_status == ReservationStatus.CANCEL:
                message = "Reservation is already cancelled"
            else:
                message = f"Illegal status transition: {from_status.value} -> {to_status.value}"
            raise InvalidStateError(
                message,
                from_state=from_status.value,
                to_state=to_status.value,
            )

    @classmethod
    def is_terminal(cls, status: ReservationStatus) -> bool:
        return len(cls._ALLOWED_TRANSITIONS.get(status, set())) == 0


@dataclass(frozen=True)
class Reservation:
    id: int
    user_id: str
    concert_id: int
    status: ReservationStatus = ReservationStatus.RESERVE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def is_active(self) -> bool:
        return not ReservationStateMachine.is_terminal(self.status)

    def cancelled(self) -> "Reservation":
        """Return a cancelled copy with a refreshed `updated_at`."""
        ReservationStateMachine.validate_transition(self.status, ReservationStatus.CANCEL)
        return replace(self, status=ReservationStatus.CANCEL, updated_at=utcnow())

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, user={self.user_id}, "
            f"concert={self.concert_id}, status={self.status.value})>"
        )
