from pydantic import BaseModel, Field

from docseq.core.modules.counter.models import DocumentType


class Allocation(BaseModel):
    """One consumed number from a document type's sequence."""

    document_type: DocumentType
    scope: str = Field(default="", description="Sub-sequence the number was drawn from, empty for the default")
    number: int = Field(..., ge=1)
