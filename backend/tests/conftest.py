"""
Pytest fixtures for fresh in-memory stores and an HTTP client.

Every test gets its own stores; the client overrides the store
dependencies so no state leaks between tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from concert_booking.main import app
from concert_booking.models.concert import Concert
from concert_booking.services.concert_service import ConcertStore
from concert_booking.services.reservation_service import ReservationStore
from concert_booking.services.store_factory import get_concert_store, get_reservation_store


@pytest.fixture
def concert_store() -> ConcertStore:
    return ConcertStore()


@pytest.fixture
def reservation_store(concert_store: ConcertStore) -> ReservationStore:
    return ReservationStore(concert_store)


@pytest.fixture
def concert(concert_store: ConcertStore) -> Concert:
    """A concert with 100 seats."""
    return concert_store.create("Test Concert", "A test concert", 100)


@pytest.fixture
def single_seat_concert(concert_store: ConcertStore) -> Concert:
    return concert_store.create("Intimate Show", "Only one seat", 1)


@pytest_asyncio.fixture(scope="function")
async def client(
    concert_store: ConcertStore,
    reservation_store: ReservationStore,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the store dependencies with the test stores."""
    app.dependency_overrides[get_concert_store] = lambda: concert_store
    app.dependency_overrides[get_reservation_store] = lambda: reservation_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
