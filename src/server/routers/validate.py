"""Validation endpoints for the API."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from server.models import DocumentRequest, ErrorResponse, TocResponse, ValidateRequest, ValidateSuccessResponse
from server.query_processor import process_toc, process_validation

router = APIRouter()

COMMON_RESPONSES: dict = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Document could not be loaded or parsed"},
}


@router.post(
    "/api/validate",
    responses={**COMMON_RESPONSES, status.HTTP_200_OK: {"model": ValidateSuccessResponse}},
)
async def api_validate(validate_request: ValidateRequest) -> JSONResponse:
    """Validate the table of contents of a Markdown document.

    **Parameters**

    - **validate_request** (`ValidateRequest`): inline Markdown or a URL, plus level options

    **Returns**

    - **JSONResponse**: the per-entry report, or an error body with status 400

    """
    response = await process_validation(validate_request)
    if isinstance(response, ErrorResponse):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=response.model_dump())
    return JSONResponse(status_code=status.HTTP_200_OK, content=response.model_dump(mode="json"))


@router.post(
    "/api/toc",
    responses={**COMMON_RESPONSES, status.HTTP_200_OK: {"model": TocResponse}},
)
async def api_toc(document_request: DocumentRequest) -> JSONResponse:
    """Generate a table of contents for a Markdown document."""
    response = await process_toc(document_request)
    if isinstance(response, ErrorResponse):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=response.model_dump())
    return JSONResponse(status_code=status.HTTP_200_OK, content=response.model_dump())
