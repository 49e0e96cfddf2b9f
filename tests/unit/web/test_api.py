"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient
from helpers import DownStore, FlakyStore

from docseq.app import App
from docseq.core.modules.counter.store import MemoryCounterStore
from docseq.web.server import create_fastapi_app


@pytest.fixture
def make_client(config):
    """Build a TestClient around a given store and config overrides."""
    clients: list[TestClient] = []

    def _make(store=None, **overrides):
        cfg = config.model_copy(update=overrides) if overrides else config
        app = App(cfg, store if store is not None else MemoryCounterStore())
        client = TestClient(create_fastapi_app(app, cfg))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


class TestAllocations:
    """Tests for POST /api/v1/allocations."""

    def test_allocate_sequence(self, client):
        """Test that consecutive requests receive consecutive numbers."""
        first = client.post("/api/v1/allocations", json={"document_type": "invoice"})
        second = client.post("/api/v1/allocations", json={"document_type": "invoice"})

        assert first.status_code == 201
        assert first.json() == {"document_type": "invoice", "scope": "", "number": 1}
        assert second.json()["number"] == 2

    def test_allocate_with_scope(self, client):
        response = client.post("/api/v1/allocations", json={"document_type": "task", "scope": "PRJ-2025-0001"})

        assert response.status_code == 201
        assert response.json() == {"document_type": "task", "scope": "PRJ-2025-0001", "number": 1}

    def test_unknown_type(self, client):
        """Test that an unknown document type is a 400 with a machine-readable type."""
        response = client.post("/api/v1/allocations", json={"document_type": "receipt"})

        assert response.status_code == 400
        assert response.json()["type"] == "invalid_document_type"
        assert client.get("/api/v1/counters").json() == []

    def test_invalid_scope(self, client):
        response = client.post("/api/v1/allocations", json={"document_type": "task", "scope": "bad scope"})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_store_unavailable(self, make_client):
        """Test that an unreachable store maps to 503 with Retry-After."""
        client = make_client(DownStore())

        response = client.post("/api/v1/allocations", json={"document_type": "invoice"})

        assert response.status_code == 503
        assert response.json()["type"] == "store_unavailable"
        assert response.headers["Retry-After"] == "1"

    def test_conflict_exhausted(self, make_client):
        """Test that exhausted conflict retries map to 409."""
        client = make_client(FlakyStore(conflicts=100), conflict_max_attempts=2)

        response = client.post("/api/v1/allocations", json={"document_type": "invoice"})

        assert response.status_code == 409
        assert response.json()["type"] == "conflict"


class TestDocumentNumbers:
    """Tests for POST /api/v1/document-numbers."""

    def test_issue_invoice_number(self, client):
        response = client.post("/api/v1/document-numbers", json={"document_type": "invoice", "document_date": "2025-05-10"})

        assert response.status_code == 201
        assert response.json() == {"document_type": "invoice", "scope": "25-26", "sequence": 1, "number": "INV/001/25-26"}

    def test_task_without_scope(self, client):
        response = client.post("/api/v1/document-numbers", json={"document_type": "task"})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_scope_for_unscoped_type(self, client):
        """Test that a scope the invoice number would not show is a 400."""
        response = client.post(
            "/api/v1/document-numbers",
            json={"document_type": "invoice", "scope": "BRANCH-A", "document_date": "2025-05-10"},
        )

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert client.get("/api/v1/counters").json() == []


class TestCounters:
    """Tests for the read-only counter endpoints."""

    def test_list_counters(self, client):
        client.post("/api/v1/allocations", json={"document_type": "bill"})
        client.post("/api/v1/allocations", json={"document_type": "bill"})

        counters = client.get("/api/v1/counters").json()

        assert len(counters) == 1
        assert counters[0]["document_type"] == "bill"
        assert counters[0]["last_issued"] == 2

    def test_get_counter_with_scope(self, client):
        client.post("/api/v1/allocations", json={"document_type": "task", "scope": "PRJ-1"})

        response = client.get("/api/v1/counters/task", params={"scope": "PRJ-1"})

        assert response.status_code == 200
        assert response.json()["last_issued"] == 1

    def test_get_counter_not_found(self, client):
        response = client.get("/api/v1/counters/invoice")

        assert response.status_code == 404
        assert response.json()["type"] == "not_found"


class TestAuthentication:
    """Tests for the optional static API token."""

    def test_open_when_no_token_configured(self, client):
        assert client.get("/api/v1/metadata/document-types").status_code == 200

    def test_missing_token_rejected(self, make_client):
        client = make_client(api_token="s3cret")

        response = client.post("/api/v1/allocations", json={"document_type": "invoice"})

        assert response.status_code == 401
        assert response.json()["type"] == "authentication_error"

    def test_wrong_token_rejected(self, make_client):
        client = make_client(api_token="s3cret")

        response = client.get("/api/v1/counters", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_valid_token_accepted(self, make_client):
        client = make_client(api_token="s3cret")

        response = client.post(
            "/api/v1/allocations", json={"document_type": "invoice"}, headers={"Authorization": "Bearer s3cret"}
        )

        assert response.status_code == 201

    def test_rejected_request_consumes_nothing(self, make_client):
        """Test that an unauthenticated request never reaches the store."""
        store = MemoryCounterStore()
        client = make_client(store, api_token="s3cret")

        client.post("/api/v1/allocations", json={"document_type": "invoice"})
        response = client.post(
            "/api/v1/allocations", json={"document_type": "invoice"}, headers={"Authorization": "Bearer s3cret"}
        )

        assert response.json()["number"] == 1

    def test_health_is_public(self, make_client):
        client = make_client(api_token="s3cret")

        assert client.get("/health").json() == {"status": "healthy"}


class TestMetadata:
    """Tests for metadata endpoints."""

    def test_document_types(self, client):
        schemes = client.get("/api/v1/metadata/document-types").json()

        assert schemes["invoice"]["reset"] == "financial_year"
        assert schemes["task"]["requires_scope"] is True
        assert len(schemes) == 11

    def test_version(self, make_client):
        client = make_client(git_commit_hash="abc123")

        info = client.get("/api/v1/metadata/version").json()

        assert info["git_commit_hash"] == "abc123"
        assert "version" in info
