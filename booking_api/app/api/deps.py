"""
FastAPI dependencies giving handlers access to the shared store.

The ``RecordStore`` is created once at startup and kept on
``app.state``; handlers receive it (or a service wrapping it) through
``Depends`` rather than importing a module-level client.
"""

from fastapi import Depends, Request

from booking_api.app.core.db import RecordStore
from booking_api.app.services.booking_service import BookingService
from booking_api.app.services.catalog_service import CatalogService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_catalog_service(store: RecordStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_booking_service(store: RecordStore = Depends(get_store)) -> BookingService:
    return BookingService(store)
