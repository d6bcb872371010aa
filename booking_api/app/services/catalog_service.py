"""
Read-only access to the services catalogue.

Service documents are maintained outside this API; the catalogue can
only be listed or looked up by identifier.
"""

import logging
from typing import List

from booking_api.app.core.db import Document, RecordStore
from booking_api.app.core.errors import NotFoundError, StoreError


logger = logging.getLogger(__name__)


class CatalogService:
    """Service for reading the ``services`` collection."""

    def __init__(self, store: RecordStore) -> None:
        self._services = store.services

    def list_services(self) -> List[Document]:
        try:
            services = self._services.find_all()
        except StoreError as exc:
            raise StoreError("Error fetching services") from exc
        logger.debug("Listing %d services", len(services))
        return services

    def get_service(self, service_id: str) -> Document:
        """Return a single service document.

        A malformed ``service_id`` is not rejected up front; the adapter
        fails to convert it and the failure is reported as a store error.
        """
        try:
            service = self._services.find_by_id(service_id)
        except StoreError as exc:
            raise StoreError("Error fetching the service") from exc
        if service is None:
            raise NotFoundError("Service not found")
        return service
