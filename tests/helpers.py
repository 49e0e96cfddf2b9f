"""Test doubles and helpers shared across test modules."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from docseq.core.modules.counter.models import DocumentType
from docseq.core.modules.counter.store import MemoryCounterStore
from docseq.errors import ConflictError, StoreUnavailableError


T = TypeVar("T")


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


class FlakyStore(MemoryCounterStore):
    """Memory store that loses the first `conflicts` increments to a concurrent writer."""

    def __init__(self, conflicts: int) -> None:
        super().__init__()
        self.conflicts = conflicts
        self.calls = 0

    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        self.calls += 1
        if self.calls <= self.conflicts:
            raise ConflictError(f"Concurrent creation of counter '{document_type}'")
        return await super().increment_and_get(document_type, scope)


class DownStore(MemoryCounterStore):
    """Memory store whose backend is unreachable."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        self.calls += 1
        raise StoreUnavailableError("Counter store is unreachable")

    async def list_counters(self) -> list[Any]:
        raise StoreUnavailableError("Counter store is unreachable")


class SlowStore(MemoryCounterStore):
    """Memory store that takes `delay` seconds to commit."""

    def __init__(self, delay: float) -> None:
        super().__init__()
        self.delay = delay

    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        await asyncio.sleep(self.delay)
        return await super().increment_and_get(document_type, scope)


class StallAfterCommitStore(MemoryCounterStore):
    """Memory store that commits the increment, then takes `delay` seconds to answer."""

    def __init__(self, delay: float) -> None:
        super().__init__()
        self.delay = delay

    async def increment_and_get(self, document_type: DocumentType, scope: str = "") -> int:
        number = await super().increment_and_get(document_type, scope)
        await asyncio.sleep(self.delay)
        return number
