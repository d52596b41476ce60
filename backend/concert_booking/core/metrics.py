"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Reservation metrics
reservation_attempts = Counter(
    'reservation_attempts_total',
    'Total reservation attempts',
    ['result']  # success, conflict, capacity_exceeded, not_found
)

reservation_cancellations = Counter(
    'reservation_cancellations_total',
    'Total reservation cancellation attempts',
    ['result']  # success, forbidden, invalid_state, not_found
)

# Admission control metrics
admission_latency = Histogram(
    'admission_check_latency_seconds',
    'Time spent inside the reservation critical section',
    buckets=[0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01]
)

# Inventory metrics
concerts_stored = Gauge(
    'concerts_stored',
    'Number of concerts currently held in the store'
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_reservation_attempt(result: str):
    """Record reservation attempt. Result: success, conflict, capacity_exceeded, not_found"""
    reservation_attempts.labels(result=result).inc()


def record_cancellation(result: str):
    """Record cancellation attempt. Result: success, forbidden, invalid_state, not_found"""
    reservation_cancellations.labels(result=result).inc()


def set_concert_count(count: int):
    concerts_stored.set(count)
