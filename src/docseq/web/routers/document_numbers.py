from datetime import date

from fastapi import APIRouter
from pydantic import BaseModel, Field

from docseq.core.modules.numbering.models import IssuedNumber
from docseq.web.deps import AppDep, AuthTokenDep
from docseq.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["document-numbers"])


class IssueNumberRequest(BaseModel):
    """Request to issue a formatted document number."""

    document_type: str = Field(..., description="Document type, e.g. `invoice`, `credit_note`, `task`")
    scope: str | None = Field(default=None, description="Parent document key, required for `task` (project code)")
    document_date: date | None = Field(default=None, description="Document date selecting the numbering period, defaults to today (UTC)")
    timeout: float | None = Field(default=None, gt=0, description="Seconds to wait for the counter store")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"document_type": "invoice"},
                {"document_type": "credit_note", "document_date": "2025-06-30"},
                {"document_type": "task", "scope": "PRJ-2025-0001"},
            ]
        }
    }


@router.post(
    "/document-numbers",
    summary="Issue document number",
    description="""Allocate the next number for a document type and render it with the type's numbering scheme.

**Reset periods:**
- `never` - one sequence for all time (e.g. `QTN-0042`)
- `yearly` - restarts every calendar year (e.g. `PO-2025-0001`)
- `financial_year` - restarts every April 1 (e.g. `INV/001/25-26`)

Use `GET /metadata/document-types` to list the schemes in effect.""",
    operation_id="issueDocumentNumber",
    status_code=201,
    responses={
        201: {"description": "Document number issued"},
        400: {"model": ErrorResponse, "description": "Unknown document type or missing/invalid scope"},
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
        409: {"model": ErrorResponse, "description": "Conflict retries exhausted, retry the request"},
        503: {"model": ErrorResponse, "description": "Counter store unavailable or timed out"},
    },
)
async def issue_document_number(request: IssueNumberRequest, app: AppDep, auth_token: AuthTokenDep) -> IssuedNumber:
    return await app.issue_number(auth_token, request.document_type, request.scope, request.document_date, request.timeout)
