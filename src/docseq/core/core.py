from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

import structlog

from docseq.config import Config, StoreKind
from docseq.core.modules.counter.store import CounterStore, MemoryCounterStore, MongoCounterStore

if TYPE_CHECKING:
    from docseq.core.modules.access.service import AccessService
    from docseq.core.modules.allocator.service import AllocatorService
    from docseq.core.modules.counter.service import CounterService
    from docseq.core.modules.numbering.service import NumberingService

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with access to the counter store."""

    def __init__(self, store: CounterStore) -> None:
        self.store = store
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    access: AccessService
    counter: CounterService
    allocator: AllocatorService
    numbering: NumberingService

    def __init__(self, store: CounterStore) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("access", "docseq.core.modules.access.service", "AccessService"),
            ("counter", "docseq.core.modules.counter.service", "CounterService"),
            ("allocator", "docseq.core.modules.allocator.service", "AllocatorService"),
            ("numbering", "docseq.core.modules.numbering.service", "NumberingService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(store)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


def create_store(config: Config) -> CounterStore:
    """Build the counter store selected by configuration."""
    if config.store == StoreKind.MEMORY:
        return MemoryCounterStore()
    return MongoCounterStore.from_url(config.database_url, config.database_timeout_ms)


class Core:
    """Container providing config, the counter store, and all service instances.

    The store is owned by the container and handed to every service, so
    separate Core instances never share counter state.
    """

    config: Config
    store: CounterStore
    services: Services

    def __init__(self, config: Config, store: CounterStore | None = None) -> None:
        self.config = config
        self.store = store if store is not None else create_store(config)
        self.services = Services(self.store)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.store.start()
        await self.services.start_all()
        logger.debug("core_started", store=type(self.store).__name__)

    async def on_stop(self) -> None:
        """Stop services and release the store on shutdown."""
        await self.services.stop_all()
        await self.store.close()
