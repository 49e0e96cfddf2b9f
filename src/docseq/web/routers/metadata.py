"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from docseq.core.modules.counter.models import DocumentType
from docseq.core.modules.numbering.models import NumberingScheme
from docseq.web.deps import AppDep, AuthTokenDep
from docseq.web.openapi import ErrorResponse

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/document-types",
    summary="Get numbering schemes",
    description="Returns every recognized document type with its template, padding and reset period.",
    operation_id="getDocumentTypes",
    responses={
        200: {"description": "Mapping of document types to numbering schemes"},
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
    },
)
async def get_document_types(app: AppDep, auth_token: AuthTokenDep) -> dict[DocumentType, NumberingScheme]:
    return await app.get_document_types(auth_token)


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns package version, git commit hash, commit date, and build time.",
    operation_id="getVersion",
    responses={
        200: {"description": "Version and build information"},
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
    },
)
async def get_version(app: AppDep, auth_token: AuthTokenDep) -> dict[str, str]:
    """Get version information."""
    return await app.get_version(auth_token)
