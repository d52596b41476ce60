"""
Tests for health, metrics and request middleware.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient, concert):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["concerts"] == 1


@pytest.mark.asyncio
async def test_request_id_headers(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_request_id_propagated(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_metrics_track_reservations(client: AsyncClient, single_seat_concert):
    await client.post("/reservations", json={"userId": "a", "concertId": single_seat_concert.id})
    await client.post("/reservations", json={"userId": "b", "concertId": single_seat_concert.id})

    response = await client.get("/metrics")
    assert response.status_code == 200
    body = response.text
    assert 'reservation_attempts_total{result="success"}' in body
    assert 'reservation_attempts_total{result="capacity_exceeded"}' in body


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client: AsyncClient):
    response = await client.get("/nope")
    assert response.status_code == 404
    assert response.json()["statusCode"] == 404
    assert response.json()["path"] == "/nope"
