from datetime import date

import structlog

from docseq import utils
from docseq.core.core import Service
from docseq.core.modules.counter.models import DocumentType, parse_document_type
from docseq.core.modules.numbering.formatting import counter_scope, format_number
from docseq.core.modules.numbering.models import DEFAULT_SCHEMES, IssuedNumber, NumberingScheme
from docseq.errors import ValidationError

logger = structlog.get_logger(__name__)


class NumberingService(Service):
    """Issues formatted document numbers on top of the allocator."""

    def get_schemes(self) -> dict[DocumentType, NumberingScheme]:
        """Default schemes with configured overrides applied."""
        return {**DEFAULT_SCHEMES, **self.core.config.schemes}

    def get_scheme(self, document_type: DocumentType) -> NumberingScheme:
        return self.get_schemes()[document_type]

    async def issue_number(
        self,
        document_type: DocumentType | str,
        scope: str | None = None,
        on: date | None = None,
        timeout: float | None = None,
    ) -> IssuedNumber:
        """Allocate the next number for a document and render it with the type's scheme.

        Sequences that reset yearly or per financial year draw from a counter
        scoped to the period containing ``on`` (today in UTC when omitted).
        A caller scope, e.g. a project code for task numbers, further splits
        the sequence.
        """
        doc_type = parse_document_type(document_type)
        scheme = self.get_scheme(doc_type)
        if scheme.requires_scope and not scope:
            raise ValidationError(f"Document type '{doc_type}' requires a scope")
        # A scope the template does not render would repeat numbers of the unscoped sequence
        if scope and not scheme.renders_scope:
            raise ValidationError(f"Document type '{doc_type}' does not take a scope")

        issue_date = on or utils.today()
        scope_key = counter_scope(scheme, scope, issue_date)
        sequence = await self.core.services.allocator.allocate(doc_type, scope_key, timeout)
        number = format_number(scheme, sequence, issue_date, scope)

        logger.info("document_number_issued", document_type=doc_type, scope=scope_key, number=number)
        return IssuedNumber(document_type=doc_type, scope=scope_key, sequence=sequence, number=number)
