"""
Booking endpoints for API v1.

These routes create, list, fetch and delete booking documents through
``BookingService``.  When the deployment sets ``BOOKINGS_REQUIRE_AUTH``
the whole router is mounted behind ``require_session``.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from booking_api.app.api.deps import get_booking_service
from booking_api.app.schemas.common import DeleteAcknowledgment, InsertAcknowledgment, MessageResponse
from booking_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
def list_bookings(
    email: Optional[str] = Query(None, description="Only return bookings made with this e-mail address"),
    bookings: BookingService = Depends(get_booking_service),
) -> List[Dict[str, Any]]:
    """List bookings, optionally filtered by exact ``email``.

    Without the query parameter every booking is returned.  A filter
    matching nothing yields an empty list.
    """
    return bookings.list_bookings(email)


@router.post("", response_model=InsertAcknowledgment, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking: Dict[str, Any] = Body(..., description="Booking document to store"),
    bookings: BookingService = Depends(get_booking_service),
) -> InsertAcknowledgment:
    return bookings.create_booking(booking)


@router.get(
    "/{booking_id}",
    response_model=Dict[str, Any],
    responses={404: {"model": MessageResponse}},
)
def get_booking(
    booking_id: str = Path(..., description="Identifier of the booking"),
    bookings: BookingService = Depends(get_booking_service),
) -> Dict[str, Any]:
    return bookings.get_booking(booking_id)


@router.delete("/{booking_id}", response_model=DeleteAcknowledgment)
def delete_booking(
    booking_id: str = Path(..., description="Identifier of the booking"),
    bookings: BookingService = Depends(get_booking_service),
) -> DeleteAcknowledgment:
    """Delete a booking.  Deleting an unknown id reports ``deletedCount: 0``."""
    return bookings.delete_booking(booking_id)
