"""Sequence counters for business document numbering."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from docseq.core.db import MongoModel
from docseq.errors import InvalidDocumentTypeError
from docseq.utils import now


class DocumentType(StrEnum):
    """Business documents that carry their own numbering sequence."""

    INQUIRY = "inquiry"
    INVOICE = "invoice"
    QUOTATION = "quotation"
    PAYROLL_RUN = "payroll_run"
    CREDIT_NOTE = "credit_note"
    DELIVERY_CHALLAN = "delivery_challan"
    PURCHASE_ORDER = "purchase_order"
    BILL = "bill"
    EXPENSE = "expense"
    PROJECT = "project"
    TASK = "task"


def parse_document_type(value: DocumentType | str) -> DocumentType:
    """Resolve a raw value to a DocumentType, raising InvalidDocumentTypeError if unknown."""
    try:
        return DocumentType(value)
    except ValueError:
        raise InvalidDocumentTypeError(f"Unknown document type: '{value}'") from None


class SequenceCounter(MongoModel):
    """Last issued number for one document type and scope.

    Indexed on (document_type, scope) - unique.
    """

    document_type: DocumentType
    scope: str = ""  # Empty scope is the type's default sequence
    last_issued: int = Field(default=0, ge=0)  # Next number will be last_issued + 1
    updated_at: datetime = Field(default_factory=now)
