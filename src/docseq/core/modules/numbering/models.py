"""Display formats and reset policies for document numbers."""

from enum import StrEnum
from string import Formatter
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from docseq.core.modules.counter.models import DocumentType

TEMPLATE_FIELDS = frozenset({"seq", "year", "fy", "scope"})


class ResetPeriod(StrEnum):
    """When a document type's sequence starts again from 1."""

    NEVER = "never"
    YEARLY = "yearly"  # Calendar year
    FINANCIAL_YEAR = "financial_year"  # April 1 to March 31


class NumberingScheme(BaseModel):
    """How numbers for one document type are scoped and rendered."""

    template: str = Field(..., description="Format with {seq}, {year}, {fy} and {scope} placeholders")
    padding: int = Field(default=0, ge=0, le=12, description="Zero-padded width of {seq}")
    reset: ResetPeriod = ResetPeriod.NEVER
    requires_scope: bool = Field(default=False, description="Callers must pass a scope, e.g. the parent project code")

    @property
    def template_fields(self) -> set[str]:
        """Placeholder names used by the template."""
        return {name for _, name, _, _ in Formatter().parse(self.template) if name is not None}

    @property
    def renders_scope(self) -> bool:
        return "scope" in self.template_fields

    @field_validator("template")
    @classmethod
    def validate_template(cls, value: str) -> str:
        try:
            parsed = [(name, spec, conversion) for _, name, spec, conversion in Formatter().parse(value) if name is not None]
        except ValueError as e:
            raise ValueError(f"Malformed template: {e}") from e
        if any(spec or conversion for _, spec, conversion in parsed):
            raise ValueError("Template fields take no format spec or conversion, use padding instead")
        fields = {name for name, _, _ in parsed}
        unknown = fields - TEMPLATE_FIELDS
        if unknown:
            raise ValueError(f"Unknown template fields: {', '.join(sorted(unknown))}")
        if "seq" not in fields:
            raise ValueError("Template must contain {seq}")
        return value

    @model_validator(mode="after")
    def validate_distinct_numbers(self) -> Self:
        """Every counter a scheme draws from must render to its own set of strings."""
        fields = self.template_fields
        if self.requires_scope and "scope" not in fields:
            raise ValueError("Template must contain {scope} when requires_scope is set")
        if self.reset == ResetPeriod.YEARLY and "year" not in fields:
            raise ValueError("Template must contain {year} when the sequence resets yearly")
        if self.reset == ResetPeriod.FINANCIAL_YEAR and "fy" not in fields:
            raise ValueError("Template must contain {fy} when the sequence resets per financial year")
        return self


class IssuedNumber(BaseModel):
    """A formatted document number together with the sequence value behind it."""

    document_type: DocumentType
    scope: str = Field(..., description="Counter scope the sequence value was drawn from")
    sequence: int = Field(..., ge=1)
    number: str


DEFAULT_SCHEMES: dict[DocumentType, NumberingScheme] = {
    DocumentType.INQUIRY: NumberingScheme(template="{seq}"),
    DocumentType.INVOICE: NumberingScheme(template="INV/{seq}/{fy}", padding=3, reset=ResetPeriod.FINANCIAL_YEAR),
    DocumentType.QUOTATION: NumberingScheme(template="QTN-{seq}", padding=4),
    DocumentType.PAYROLL_RUN: NumberingScheme(template="PAY-{year}-{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.CREDIT_NOTE: NumberingScheme(template="CN{year}{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.DELIVERY_CHALLAN: NumberingScheme(template="DC{year}{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.PURCHASE_ORDER: NumberingScheme(template="PO-{year}-{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.BILL: NumberingScheme(template="BILL-{year}-{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.EXPENSE: NumberingScheme(template="EXP-{year}-{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.PROJECT: NumberingScheme(template="PRJ-{year}-{seq}", padding=4, reset=ResetPeriod.YEARLY),
    DocumentType.TASK: NumberingScheme(template="{scope}-T{seq}", padding=3, requires_scope=True),
}
