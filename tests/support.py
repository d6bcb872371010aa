# This file provides in-memory stand-ins for the pymongo objects used by RecordStore.
# It exists so API and adapter tests run without a MongoDB deployment.
# The fakes return real pymongo result objects and real ObjectIds, so the adapter code under test is unchanged.

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from typing import Any

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.results import DeleteResult, InsertOneResult

from booking_api.app.core.config import Settings
from booking_api.app.core.db import RecordStore
from booking_api.app.main import create_app

TEST_SECRET = "test-secret"


class FakeCollection:
    """Subset of ``pymongo.collection.Collection`` backed by a list."""

    def __init__(self, name: str, documents: list[dict[str, Any]] | None = None) -> None:
        self.name = name
        self.documents = [dict(doc) for doc in documents or []]
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
        return all(key in document and document[key] == value for key, value in query.items())

    def find(self, query: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        self._check()
        query = query or {}
        return [dict(doc) for doc in self.documents if self._matches(doc, query)]

    def find_one(self, query: Mapping[str, Any]) -> dict[str, Any] | None:
        self._check()
        for doc in self.documents:
            if self._matches(doc, query):
                return dict(doc)
        return None

    def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        self._check()
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertOneResult(document["_id"], True)

    def delete_one(self, query: Mapping[str, Any]) -> DeleteResult:
        self._check()
        for index, doc in enumerate(self.documents):
            if self._matches(doc, query):
                del self.documents[index]
                return DeleteResult({"n": 1, "ok": 1.0}, True)
        return DeleteResult({"n": 0, "ok": 1.0}, True)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


class _FakeAdmin:
    def __init__(self, client: FakeMongoClient) -> None:
        self._client = client

    def command(self, name: str) -> dict[str, Any]:
        self._client.commands.append(name)
        if self._client.ping_error is not None:
            raise self._client.ping_error
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self) -> None:
        self.databases: dict[str, FakeDatabase] = {}
        self.ping_error: Exception | None = None
        self.commands: list[str] = []
        self.closed = False
        self.admin = _FakeAdmin(self)

    def __getitem__(self, name: str) -> FakeDatabase:
        if name not in self.databases:
            self.databases[name] = FakeDatabase()
        return self.databases[name]

    def close(self) -> None:
        self.closed = True


def build_store(
    *,
    services: list[dict[str, Any]] | None = None,
    bookings: list[dict[str, Any]] | None = None,
) -> tuple[RecordStore, FakeMongoClient]:
    """Create a RecordStore over fresh fake collections."""

    client = FakeMongoClient()
    database = client["HexaaDB"]
    database.collections["services"] = FakeCollection("services", services)
    database.collections["booking"] = FakeCollection("booking", bookings)
    return RecordStore(client, "HexaaDB"), client


def fake_collection(client: FakeMongoClient, name: str) -> FakeCollection:
    return client["HexaaDB"][name]


def build_test_settings(**overrides: Any) -> Settings:
    """Deterministic settings; any field can be overridden."""

    defaults: dict[str, Any] = {
        "secret_key": TEST_SECRET,
        "debug": False,
        "log_level": "INFO",
        "log_file": "",
        "bookings_require_auth": False,
        "cookie_name": "token",
        "cookie_secure": True,
        "cookie_samesite": "none",
    }
    defaults.update(overrides)
    return replace(Settings(), **defaults)


@contextmanager
def api_test_client(
    *,
    settings: Settings | None = None,
    store: RecordStore | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient for an app wired to the given (or an empty fake) store."""

    resolved_store = store if store is not None else build_store()[0]
    app = create_app(settings or build_test_settings(), store=resolved_store)
    with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
        yield client


def cookie_from(response: Any, name: str = "token") -> tuple[str, str]:
    """Return the value and the attribute string of a Set-Cookie header."""

    for header in response.headers.get_list("set-cookie"):
        cookie_name, _, rest = header.partition("=")
        if cookie_name == name:
            value, _, attributes = rest.partition(";")
            return value.strip('"'), attributes
    raise AssertionError(f"no Set-Cookie for {name!r}")
