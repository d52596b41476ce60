"""
Concert record held by the in-memory concert store.

Key design decisions:
- Frozen: capacity and timestamps never change after creation
- `seat` is the total capacity; availability is derived from reservations
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Concert:
    id: int
    name: str
    description: str
    seat: int
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<Concert(id={self.id}, name={self.name}, seat={self.seat})>"


@dataclass(frozen=True)
class ConcertStats:
    """A concert together with its live reservation count."""

    concert: Concert
    reserved_count: int

    @property
    def available_seats(self) -> int:
        return max(self.concert.seat - self.reserved_count, 0)
