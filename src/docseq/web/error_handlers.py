import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from docseq.errors import (
    AuthenticationError,
    ConflictError,
    InvalidDocumentTypeError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, InvalidDocumentTypeError):
        status_code = 400
        error_type = "invalid_document_type"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def transient_error_handler(_: Request, exc: Exception) -> Response:
    """Handle retryable store failures; the caller should retry with backoff."""
    if isinstance(exc, ConflictError):
        status_code = 409
        error_type = "conflict"
    elif isinstance(exc, StoreUnavailableError):
        status_code = 503
        error_type = "store_unavailable"
    else:
        status_code = 503
        error_type = "transient_error"

    logger.warning("Transient allocation failure: %s", exc)
    return create_json_error_response(
        status_code=status_code, message=str(exc), error_type=error_type, headers={"Retry-After": "1"}
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
