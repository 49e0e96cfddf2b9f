from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="docseq API",
            version="0.1.0",
            summary="Race-free sequential numbering for business documents",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Static API token, required only when DOCSEQ_API_TOKEN is set",
            },
        }
        openapi_schema["security"] = [{"BearerAuth": []}]

        # Health check is always public
        health = openapi_schema["paths"].get("/health", {})
        for operation in health.values():
            operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Unknown document type: 'receipt'", "type": "invalid_document_type"},
                {"message": "Counter store is unreachable", "type": "store_unavailable"},
                {"message": "Concurrent creation of counter 'invoice' (scope '25-26')", "type": "conflict"},
            ]
        }
    }
