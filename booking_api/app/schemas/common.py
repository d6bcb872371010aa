"""
Response models shared by the API routes.

Service and booking records are schema-less documents and are returned
as plain dictionaries; only the acknowledgements produced by write
operations have a fixed shape.  Field aliases keep the camelCase names
clients already rely on (``insertedId``, ``deletedCount``).
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str


class InsertAcknowledgment(BaseModel):
    """Result of inserting a document."""

    acknowledged: bool
    inserted_id: str = Field(..., alias="insertedId", description="Store-assigned identifier of the new document")

    model_config = {
        "populate_by_name": True,
    }


class DeleteAcknowledgment(BaseModel):
    """Result of deleting a document by identifier.

    ``deleted_count`` is ``0`` when nothing matched, which is not an
    error.
    """

    acknowledged: bool
    deleted_count: int = Field(..., alias="deletedCount", ge=0)

    model_config = {
        "populate_by_name": True,
    }
