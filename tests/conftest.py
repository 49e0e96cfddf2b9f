"""Shared pytest fixtures."""

from typing import Any

import pytest

from docseq.config import Config, StoreKind
from docseq.core.core import Core
from docseq.core.modules.counter.store import CounterStore, MemoryCounterStore


@pytest.fixture
def config() -> Config:
    """Memory-backed config with no backoff delay between conflict retries."""
    return Config(
        _env_file=None,  # type: ignore[call-arg]
        store=StoreKind.MEMORY,
        conflict_min_wait=0,
        conflict_max_wait=0,
        allocation_timeout=5.0,
    )


@pytest.fixture
def store() -> MemoryCounterStore:
    return MemoryCounterStore()


@pytest.fixture
def make_core(config):
    """Build a Core around a given store, defaulting to a fresh memory store."""

    def _make(store: CounterStore | None = None, **overrides: Any) -> Core:
        cfg = config.model_copy(update=overrides) if overrides else config
        return Core(cfg, store if store is not None else MemoryCounterStore())

    return _make


@pytest.fixture
def core(make_core, store) -> Core:
    return make_core(store)
