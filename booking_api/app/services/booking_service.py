"""
Business logic for bookings.

Bookings are opaque documents with an ``email`` field used to look up
the bookings of one customer.  They can be created, listed, fetched and
deleted; there is no update.  Each operation is a single store call,
attempted once, with no transaction around it: two concurrent inserts
both succeed in whatever order the database applies them.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from booking_api.app.core.db import Document, RecordStore
from booking_api.app.core.errors import NotFoundError, StoreError
from booking_api.app.schemas.common import DeleteAcknowledgment, InsertAcknowledgment


logger = logging.getLogger(__name__)


class BookingService:
    """Service for managing the ``booking`` collection."""

    def __init__(self, store: RecordStore) -> None:
        self._bookings = store.booking

    def list_bookings(self, email: Optional[str] = None) -> List[Document]:
        """Return the bookings for ``email``, or every booking.

        Matching is exact and case sensitive.  ``None`` or an empty string
        means no filter, not an empty result.
        """
        query: Dict[str, Any] = {}
        if email:
            query = {"email": email}
        try:
            return self._bookings.find(query)
        except StoreError as exc:
            raise StoreError("Error fetching booking data") from exc

    def get_booking(self, booking_id: str) -> Document:
        try:
            booking = self._bookings.find_by_id(booking_id)
        except StoreError as exc:
            raise StoreError("Error fetching the booking") from exc
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    def create_booking(self, booking: Mapping[str, Any]) -> InsertAcknowledgment:
        try:
            result = self._bookings.insert(booking)
        except StoreError as exc:
            raise StoreError("Error adding item") from exc
        logger.info("Created booking %s", result.inserted_id)
        return InsertAcknowledgment(
            acknowledged=result.acknowledged,
            inserted_id=str(result.inserted_id),
        )

    def delete_booking(self, booking_id: str) -> DeleteAcknowledgment:
        """Delete a booking by identifier.

        Deleting an identifier that no longer exists reports
        ``deleted_count == 0``.
        """
        try:
            result = self._bookings.delete_by_id(booking_id)
        except StoreError as exc:
            raise StoreError("Error deleting booking") from exc
        logger.info("Deleted %d booking(s) with id %s", result.deleted_count, booking_id)
        return DeleteAcknowledgment(
            acknowledged=result.acknowledged,
            deleted_count=result.deleted_count,
        )
