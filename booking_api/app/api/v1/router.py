"""
Top-level router for version 1 of the API.

Whether the booking routes require a session cookie is a deployment
decision (``BOOKINGS_REQUIRE_AUTH``), so the router is assembled by a
function instead of at import time.
"""

from fastapi import APIRouter, Depends

from booking_api.app.core.security import require_session

from .endpoints import bookings, services


def build_router(bookings_require_auth: bool = False) -> APIRouter:
    router = APIRouter()
    router.include_router(services.router, prefix="/services", tags=["services"])
    booking_dependencies = [Depends(require_session)] if bookings_require_auth else []
    router.include_router(
        bookings.router,
        prefix="/booking",
        tags=["booking"],
        dependencies=booking_dependencies,
    )
    return router
