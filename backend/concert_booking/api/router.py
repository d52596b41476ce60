"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from concert_booking.api.routes import concerts, reservations

api_router = APIRouter()
api_router.include_router(concerts.router)
api_router.include_router(reservations.router)
