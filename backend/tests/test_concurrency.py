"""
Concurrency tests: many callers racing for few seats.

Threads are released together by a barrier so the duplicate check and
the seat count are contended as hard as possible.
"""

import asyncio
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest
from httpx import AsyncClient

from concert_booking.core.exceptions import CapacityExceededError, ConflictError, InvalidStateError
from concert_booking.models.reservation import ReservationStatus

WORKERS = 32


def _race(callables):
    barrier = threading.Barrier(len(callables))

    def run(fn):
        barrier.wait()
        try:
            return fn()
        except (CapacityExceededError, ConflictError, InvalidStateError) as e:
            return e

    with ThreadPoolExecutor(max_workers=len(callables)) as pool:
        return list(pool.map(run, callables))


def test_concurrent_creates_never_overbook(concert_store, reservation_store):
    concert = concert_store.create("Flash Sale", "10 seats, 32 fans", 10)

    results = _race([
        (lambda user=f"user{i}": reservation_store.create(user, concert.id))
        for i in range(WORKERS)
    ])

    admitted = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, CapacityExceededError)]
    assert len(admitted) == 10
    assert len(rejected) == WORKERS - 10
    assert reservation_store.get_reservation_count_by_concert_id(concert.id) == 10


def test_concurrent_duplicate_creates_admit_one(concert_store, reservation_store):
    concert = concert_store.create("Big Hall", "plenty of seats", 1000)

    results = _race([
        (lambda: reservation_store.create("same-user", concert.id))
        for _ in range(WORKERS)
    ])

    admitted = [r for r in results if not isinstance(r, Exception)]
    assert len(admitted) == 1
    rejected = [r for r in results if isinstance(r, Exception)]
    assert len(rejected) == WORKERS - 1
    assert all(isinstance(r, ConflictError) for r in rejected)
    assert reservation_store.get_reservation_ids_by_user_and_concert("same-user", concert.id) == [admitted[0].id]


def test_concurrent_creates_get_unique_ids(concert_store, reservation_store):
    concerts = [concert_store.create(f"Show {i}", "", 100) for i in range(4)]

    results = _race([
        (lambda user=f"user{i}", concert_id=concerts[i % 4].id: reservation_store.create(user, concert_id))
        for i in range(WORKERS)
    ])

    ids = [r.id for r in results]
    assert len(set(ids)) == WORKERS
    assert sorted(ids) == list(range(1, WORKERS + 1))


def test_interleaved_cancel_and_create_respect_capacity(concert_store, reservation_store):
    concert = concert_store.create("Small Room", "", 5)
    holders = [reservation_store.create(f"holder{i}", concert.id) for i in range(5)]

    cancels = [
        (lambda r=r: reservation_store.cancel(r.user_id, r.id))
        for r in holders
    ]
    creates = [
        (lambda user=f"newcomer{i}": reservation_store.create(user, concert.id))
        for i in range(10)
    ]
    _race(cancels + creates)

    active = [r for r in reservation_store.find_all() if r.status == ReservationStatus.RESERVE]
    assert len(active) <= 5
    assert reservation_store.get_reservation_count_by_concert_id(concert.id) == len(active)
    per_user = Counter(r.user_id for r in active)
    assert all(n == 1 for n in per_user.values())


def test_concurrent_cancels_of_one_reservation_succeed_once(concert_store, reservation_store):
    concert = concert_store.create("Encore", "", 5)
    reservation = reservation_store.create("a", concert.id)

    results = _race([
        (lambda: reservation_store.cancel("a", reservation.id))
        for _ in range(16)
    ])

    rejected = [r for r in results if isinstance(r, Exception)]
    assert results.count(None) == 1
    assert len(rejected) == 15
    assert all(isinstance(r, InvalidStateError) for r in rejected)
    assert reservation_store.find_one(reservation.id).status == ReservationStatus.CANCEL
    assert reservation_store.get_reservation_count_by_concert_id(concert.id) == 0


@pytest.mark.asyncio
async def test_concurrent_http_reservations(client: AsyncClient, concert_store):
    """Concurrent POST /reservations on a 3-seat concert admit exactly 3."""
    concert = concert_store.create("Tiny Venue", "", 3)

    responses = await asyncio.gather(*[
        client.post("/reservations", json={"userId": f"fan{i}", "concertId": concert.id})
        for i in range(20)
    ])

    codes = Counter(r.status_code for r in responses)
    assert codes[201] == 3
    assert codes[400] == 17
