"""Tests for read-only counter inspection."""

import pytest
from helpers import run

from docseq.core.modules.counter.models import DocumentType, parse_document_type
from docseq.errors import InvalidDocumentTypeError, NotFoundError


class TestParseDocumentType:
    """Tests for parse_document_type function."""

    def test_known_values(self):
        """Test that every enum value round-trips."""
        for doc_type in DocumentType:
            assert parse_document_type(doc_type.value) is doc_type

    def test_unknown_value(self):
        """Test that unknown and wrongly-cased values are rejected."""
        with pytest.raises(InvalidDocumentTypeError):
            parse_document_type("Invoice")
        with pytest.raises(InvalidDocumentTypeError):
            parse_document_type("")


class TestCounterService:
    """Tests for CounterService."""

    def test_get_counters_empty(self, core):
        """Test that a fresh store has no counters."""
        assert run(core.services.counter.get_counters()) == []

    def test_get_counter_after_allocation(self, core):
        """Test that the counter reflects the last issued number."""
        run(core.services.allocator.allocate(DocumentType.EXPENSE))
        run(core.services.allocator.allocate(DocumentType.EXPENSE))

        counter = run(core.services.counter.get_counter("expense"))

        assert counter.last_issued == 2
        assert counter.scope == ""

    def test_get_counter_not_found(self, core):
        """Test that an unused sequence raises NotFoundError."""
        with pytest.raises(NotFoundError):
            run(core.services.counter.get_counter("expense"))

    def test_get_counter_unknown_type(self, core):
        """Test that an unknown type raises InvalidDocumentTypeError."""
        with pytest.raises(InvalidDocumentTypeError):
            run(core.services.counter.get_counter("receipt"))
