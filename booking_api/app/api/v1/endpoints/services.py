"""
Services catalogue endpoints for API v1.

Both routes are public and read-only.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path

from booking_api.app.api.deps import get_catalog_service
from booking_api.app.schemas.common import MessageResponse
from booking_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
def list_services(catalog: CatalogService = Depends(get_catalog_service)) -> List[Dict[str, Any]]:
    """Return every service document."""
    return catalog.list_services()


@router.get(
    "/{service_id}",
    response_model=Dict[str, Any],
    responses={404: {"model": MessageResponse}},
)
def get_service(
    service_id: str = Path(..., description="Identifier of the service"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    """Return one service document, or 404 if no document has this id.

    The identifier is not validated here: a string that is not a valid
    ObjectId produces a 500 from the store layer rather than a 400.
    """
    return catalog.get_service(service_id)
