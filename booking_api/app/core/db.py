"""
MongoDB integration.

``RecordStore`` owns the ``MongoClient`` created at application
startup and exposes the two collections used by the API as
``DocumentCollection`` adapters.  The adapters are the only place that
knows about BSON types: identifiers come in as strings and documents
go out with ``ObjectId``, ``Decimal128`` and binary values rendered as
strings.

Every driver failure (including a path identifier that is not a valid
``ObjectId``) is re-raised as ``StoreError`` with the original
exception chained, so the service layer only has to deal with one
error type.
"""

import base64
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from bson import DBRef, Decimal128, MaxKey, MinKey, ObjectId, Regex, Timestamp, json_util
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.results import DeleteResult, InsertOneResult
from pymongo.server_api import ServerApi

from .config import Settings
from .errors import StoreError


logger = logging.getLogger(__name__)

Document = Dict[str, Any]

_EXTENDED_JSON_TYPES = (Timestamp, Regex, DBRef, MinKey, MaxKey)


def to_jsonable(value: Any) -> Any:
    """Render a stored document with JSON-compatible values, recursively.

    ``ObjectId`` and ``Decimal128`` become strings and binary data is
    base64 encoded.  The remaining BSON-only types (``Timestamp``,
    ``Regex``, ``DBRef``, ``MinKey``, ``MaxKey``) use their MongoDB
    Extended JSON form.
    """
    if isinstance(value, (ObjectId, Decimal128)):
        return str(value)
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, Mapping):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, _EXTENDED_JSON_TYPES):
        return to_jsonable(json_util.default(value))
    return value


class DocumentCollection:
    """Adapter over a single pymongo collection."""

    def __init__(self, collection: Any) -> None:
        self._collection = collection
        self.name = collection.name

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (PyMongoError, BSONError) as exc:
            raise StoreError(f"Failed to {action} in '{self.name}'") from exc

    def find_all(self) -> List[Document]:
        return self.find({})

    def find(self, query: Mapping[str, Any]) -> List[Document]:
        """Return every document matching ``query`` (equality filter)."""
        with self._translate_errors("find documents"):
            documents = [to_jsonable(doc) for doc in self._collection.find(dict(query))]
        logger.debug("Found %d documents in %s", len(documents), self.name)
        return documents

    def find_by_id(self, document_id: str) -> Optional[Document]:
        with self._translate_errors("find document"):
            document = self._collection.find_one({"_id": ObjectId(document_id)})
        return to_jsonable(document) if document is not None else None

    def insert(self, document: Mapping[str, Any]) -> InsertOneResult:
        # insert_one adds ``_id`` to the dict it receives; keep the
        # caller's mapping untouched.
        with self._translate_errors("insert document"):
            return self._collection.insert_one(dict(document))

    def delete_by_id(self, document_id: str) -> DeleteResult:
        with self._translate_errors("delete document"):
            return self._collection.delete_one({"_id": ObjectId(document_id)})


class RecordStore:
    """Process-wide handle on the database and its two collections."""

    def __init__(
        self,
        client: Any,
        database_name: str,
        services_collection: str = "services",
        booking_collection: str = "booking",
    ) -> None:
        self._client = client
        self._database = client[database_name]
        self.services = DocumentCollection(self._database[services_collection])
        self.booking = DocumentCollection(self._database[booking_collection])

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecordStore":
        """Create a client for the configured deployment.

        ``MongoClient`` connects lazily; use :meth:`ping` to check that
        the deployment is reachable.
        """
        try:
            client = MongoClient(
                settings.mongo_uri,
                server_api=ServerApi("1", strict=True, deprecation_errors=True),
                serverSelectionTimeoutMS=settings.db_timeout_ms,
            )
        except PyMongoError as exc:
            # Malformed URIs and SRV lookup failures surface here.
            raise StoreError("Failed to create the database client") from exc
        return cls(
            client,
            settings.db_name,
            services_collection=settings.services_collection,
            booking_collection=settings.booking_collection,
        )

    def ping(self) -> None:
        try:
            self._client.admin.command("ping")
        except PyMongoError as exc:
            raise StoreError("Failed to ping the database") from exc

    def close(self) -> None:
        self._client.close()
