from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from importlib.metadata import PackageNotFoundError, version

from docseq.config import Config
from docseq.core.core import Core
from docseq.core.modules.access.models import AuthToken
from docseq.core.modules.allocator.models import Allocation
from docseq.core.modules.counter.models import DocumentType, SequenceCounter
from docseq.core.modules.counter.store import CounterStore
from docseq.core.modules.numbering.models import IssuedNumber, NumberingScheme


class App:
    """Facade for all application operations, checks the API token before delegating to Core."""

    def __init__(self, config: Config, store: CounterStore | None = None) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def is_auth_token_valid(self, auth_token: AuthToken | None) -> bool:
        return self._core.services.access.is_auth_token_valid(auth_token)

    async def allocate(
        self, auth_token: AuthToken | None, document_type: str, scope: str = "", timeout: float | None = None
    ) -> Allocation:
        """Reserve the next raw sequence number for a document type."""
        self._core.services.access.ensure_authenticated(auth_token)
        number = await self._core.services.allocator.allocate(document_type, scope, timeout)
        return Allocation(document_type=DocumentType(document_type), scope=scope, number=number)

    async def issue_number(
        self,
        auth_token: AuthToken | None,
        document_type: str,
        scope: str | None = None,
        on: date | None = None,
        timeout: float | None = None,
    ) -> IssuedNumber:
        """Reserve the next number and render it with the document type's scheme."""
        self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.numbering.issue_number(document_type, scope, on, timeout)

    async def get_counters(self, auth_token: AuthToken | None) -> list[SequenceCounter]:
        self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.counter.get_counters()

    async def get_counter(self, auth_token: AuthToken | None, document_type: str, scope: str = "") -> SequenceCounter:
        self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.counter.get_counter(document_type, scope)

    async def get_document_types(self, auth_token: AuthToken | None) -> dict[DocumentType, NumberingScheme]:
        """Get the numbering scheme of every document type."""
        self._core.services.access.ensure_authenticated(auth_token)
        return self._core.services.numbering.get_schemes()

    async def get_version(self, auth_token: AuthToken | None) -> dict[str, str]:
        """Get package version and build metadata."""
        self._core.services.access.ensure_authenticated(auth_token)
        try:
            package_version = version("docseq")
        except PackageNotFoundError:
            package_version = "unknown"
        config = self._core.config
        return {
            "version": package_version,
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }
