"""Counter store adapters.

A store exposes exactly one write primitive, ``increment_and_get``, which
reserves the next number atomically at the storage layer. There is no
get/set pair: reading the last value and writing it back in two steps is
the race this package exists to prevent.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import urlparse
from uuid import uuid4

import structlog
from pymongo import ASCENDING, AsyncMongoClient, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from docseq.core.modules.counter.models import DocumentType, SequenceCounter
from docseq.errors import ConflictError, StoreUnavailableError
from docseq.utils import now

logger = structlog.get_logger(__name__)


class CounterStore(ABC):
    """Durable, atomic storage of sequence counters keyed by document type and scope."""

    async def start(self) -> None:
        """Prepare the store (indexes, connections) on application startup."""

    async def close(self) -> None:
        """Release resources on application shutdown."""

    @abstractmethod
    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        """Atomically increment the counter and return the new value.

        A missing counter is created with an implicit previous value of 0,
        so the first call for a key returns 1.
        """

    @abstractmethod
    async def get_counter(self, document_type: DocumentType, scope: str = "") -> SequenceCounter | None:
        """Get a snapshot of one counter, or None if it was never incremented."""

    @abstractmethod
    async def list_counters(self) -> list[SequenceCounter]:
        """Get snapshots of all counters ordered by document type and scope."""


class MongoCounterStore(CounterStore):
    """Counter store backed by a MongoDB collection.

    Uses find_one_and_update with $inc and upsert so the read-modify-write
    happens inside a single server-side operation. Two concurrent upserts of a
    missing counter can race on the unique index; the loser surfaces as
    ConflictError and is retried by the allocator.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]], client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self._client = client
        self._collection = database.get_collection("counters")

    @classmethod
    def from_url(cls, database_url: str, timeout_ms: int = 5000) -> "MongoCounterStore":
        """Create a store owning its own client for the database named in the URL path."""
        client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            database_url,
            uuidRepresentation="standard",
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        database = client.get_database(urlparse(database_url).path[1:] or "docseq")
        return cls(database, client)

    async def start(self) -> None:
        """Create the unique index that backs conflict detection."""
        try:
            await self._collection.create_index([("document_type", ASCENDING), ("scope", ASCENDING)], unique=True)
        except ConnectionFailure as e:
            raise StoreUnavailableError("Counter store is unreachable") from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        try:
            result = await self._collection.find_one_and_update(
                {"document_type": document_type, "scope": scope},
                {
                    "$inc": {"last_issued": 1},
                    "$set": {"updated_at": now()},
                    "$setOnInsert": {"_id": uuid4()},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            logger.debug("counter_upsert_conflict", document_type=document_type, scope=scope)
            raise ConflictError(f"Concurrent creation of counter '{document_type}' (scope '{scope}')") from e
        except ConnectionFailure as e:
            raise StoreUnavailableError("Counter store is unreachable") from e

        # With upsert the document always exists; 1 means it was just created
        return int(result["last_issued"])

    async def get_counter(self, document_type: DocumentType, scope: str = "") -> SequenceCounter | None:
        try:
            doc = await self._collection.find_one({"document_type": document_type, "scope": scope})
        except ConnectionFailure as e:
            raise StoreUnavailableError("Counter store is unreachable") from e
        if doc is None:
            return None
        return SequenceCounter.model_validate(doc)

    async def list_counters(self) -> list[SequenceCounter]:
        try:
            cursor = self._collection.find().sort([("document_type", ASCENDING), ("scope", ASCENDING)])
            return await SequenceCounter.list_cursor(cursor)
        except ConnectionFailure as e:
            raise StoreUnavailableError("Counter store is unreachable") from e


class MemoryCounterStore(CounterStore):
    """In-process counter store for single-process deployments and tests.

    A threading lock guards the map, so callers on other threads or event
    loops see the same atomic increments. Counters are lost on restart.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[tuple[DocumentType, str], SequenceCounter] = {}

    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        with self._lock:
            key = (document_type, scope)
            counter = self._counters.get(key)
            if counter is None:
                counter = SequenceCounter(document_type=document_type, scope=scope)
                self._counters[key] = counter
            counter.last_issued += 1
            counter.updated_at = now()
            return counter.last_issued

    async def get_counter(self, document_type: DocumentType, scope: str = "") -> SequenceCounter | None:
        with self._lock:
            counter = self._counters.get((document_type, scope))
            return counter.model_copy() if counter is not None else None

    async def list_counters(self) -> list[SequenceCounter]:
        with self._lock:
            return [self._counters[key].model_copy() for key in sorted(self._counters)]
