from typing import Annotated

from fastapi import APIRouter, Query

from docseq.core.modules.counter.models import SequenceCounter
from docseq.web.deps import AppDep, AuthTokenDep
from docseq.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["counters"])


@router.get(
    "/counters",
    summary="List counters",
    description="Get the last issued number of every sequence that has been used. Read only.",
    operation_id="listCounters",
    responses={
        200: {"description": "List of counters"},
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
        503: {"model": ErrorResponse, "description": "Counter store unavailable"},
    },
)
async def list_counters(app: AppDep, auth_token: AuthTokenDep) -> list[SequenceCounter]:
    return await app.get_counters(auth_token)


@router.get(
    "/counters/{document_type}",
    summary="Get counter",
    description="Get the last issued number for one document type and scope. Read only.",
    operation_id="getCounter",
    responses={
        200: {"description": "Counter details"},
        400: {"model": ErrorResponse, "description": "Unknown document type"},
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
        404: {"model": ErrorResponse, "description": "No number issued yet for this sequence"},
        503: {"model": ErrorResponse, "description": "Counter store unavailable"},
    },
)
async def get_counter(
    document_type: str,
    app: AppDep,
    auth_token: AuthTokenDep,
    scope: Annotated[str, Query(description="Sub-sequence key, empty for the default sequence")] = "",
) -> SequenceCounter:
    return await app.get_counter(auth_token, document_type, scope)
