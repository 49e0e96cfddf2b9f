from fastapi import APIRouter
from pydantic import BaseModel, Field

from docseq.core.modules.allocator.models import Allocation
from docseq.web.deps import AppDep, AuthTokenDep
from docseq.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["allocations"])


class AllocateRequest(BaseModel):
    """Request to reserve the next number in a sequence."""

    document_type: str = Field(..., description="Document type, e.g. `invoice`, `quotation`, `payroll_run`")
    scope: str = Field(default="", description="Optional sub-sequence key; empty selects the type's default sequence")
    timeout: float | None = Field(default=None, gt=0, description="Seconds to wait for the counter store")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"document_type": "inquiry"},
                {"document_type": "task", "scope": "PRJ-2025-0001"},
            ]
        }
    }


@router.post(
    "/allocations",
    summary="Allocate next number",
    description=(
        "Atomically reserve the next integer in a document type's sequence. "
        "The returned number is consumed even if the caller never saves its document; "
        "calling this twice always returns two different numbers."
    ),
    operation_id="allocateNumber",
    status_code=201,
    responses={
        201: {"description": "Number allocated"},
        400: {"model": ErrorResponse, "description": "Unknown document type or invalid scope"},
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
        409: {"model": ErrorResponse, "description": "Conflict retries exhausted, retry the allocation"},
        503: {"model": ErrorResponse, "description": "Counter store unavailable or timed out"},
    },
)
async def allocate_number(request: AllocateRequest, app: AppDep, auth_token: AuthTokenDep) -> Allocation:
    return await app.allocate(auth_token, request.document_type, request.scope, request.timeout)
