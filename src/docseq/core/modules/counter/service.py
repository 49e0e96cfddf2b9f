from docseq.core.core import Service
from docseq.core.modules.counter.models import SequenceCounter, parse_document_type
from docseq.errors import NotFoundError


class CounterService(Service):
    """Read-only access to sequence counters for inspection."""

    async def get_counters(self) -> list[SequenceCounter]:
        """Get all counters that have issued at least one number."""
        return await self.store.list_counters()

    async def get_counter(self, document_type: str, scope: str = "") -> SequenceCounter:
        """Get one counter. Raises NotFoundError if nothing was allocated for it yet."""
        doc_type = parse_document_type(document_type)
        counter = await self.store.get_counter(doc_type, scope)
        if counter is None:
            raise NotFoundError(f"No numbers issued for '{doc_type}' (scope '{scope}')")
        return counter
