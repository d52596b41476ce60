"""
Domain error taxonomy for the reservation core.

Every error is raised at the point where an invariant check fails and is
propagated to the caller unmodified. The HTTP layer maps each class to a
status code through ``status_code``; the core itself never looks at it.
"""


class ReservationServiceError(Exception):
    """Base exception for all domain-level errors."""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ReservationServiceError):
    """Referenced concert or reservation does not exist."""

    status_code = 404


class ConflictError(ReservationServiceError):
    """User already holds an active reservation for the concert."""

    status_code = 409


class CapacityExceededError(ReservationServiceError):
    """Concert has no remaining seats."""

    status_code = 400


class ForbiddenError(ReservationServiceError):
    """Caller tried to cancel a reservation owned by someone else."""

    status_code = 403


class InvalidStateError(ReservationServiceError):
    """Reservation status does not allow the requested transition."""

    status_code = 400

    def __init__(self, message: str, from_state: str = "", to_state: str = ""):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(message)


class InvalidCapacityError(ReservationServiceError):
    """Concert seat capacity must be a positive integer."""

    status_code = 422
