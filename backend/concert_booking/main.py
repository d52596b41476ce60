"""
Concert Reservation API - Main Application Entry Point

Seat reservation for concerts:
- Concert management with fixed seat capacity
- Concurrency-safe admission control (capacity, one seat per user, ownership)
- Structured logging with request correlation
- Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from concert_booking.core.config import get_settings
from concert_booking.core.logging import setup_logging, get_logger
from concert_booking.core.metrics import metrics_endpoint
from concert_booking.api.errors import register_exception_handlers
from concert_booking.api.router import api_router
from concert_booking.api.middleware import RequestLoggingMiddleware
from concert_booking.services.concert_service import ConcertStore
from concert_booking.services.store_factory import (
    get_concert_store,
    get_reservation_store,
    reset_stores,
)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Stores live for the lifetime of the process; nothing is persisted
    get_reservation_store()
    logger.info("stores_ready")

    yield

    reset_stores()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Concert seat reservation API with concurrency-safe admission control",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check(concerts: ConcertStore = Depends(get_concert_store)):
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "concerts": concerts.count(),
    }


if settings.METRICS_ENABLED:
    @app.get("/metrics", tags=["Health"], include_in_schema=False)
    async def metrics():
        return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
