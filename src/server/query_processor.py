"""Process validation requests by loading, parsing and checking a document."""

from __future__ import annotations

from mdtoc.checker import CheckOptions, check_markdown
from mdtoc.config import MDTOC_ALLOWED_HOSTS
from mdtoc.exceptions import MdtocError
from mdtoc.fetch import fetch_markdown
from mdtoc.generator import generate_toc
from mdtoc.parser import parse_markdown
from mdtoc.utils.logging_config import get_logger
from server.models import (
    DocumentRequest,
    ErrorResponse,
    TocResponse,
    ValidateRequest,
    ValidateResponse,
    ValidateSuccessResponse,
)
from server.server_config import MAX_DOCUMENT_SIZE

# Initialize logger for this module
logger = get_logger(__name__)


async def _load(request: DocumentRequest) -> str:
    if request.markdown is not None:
        return request.markdown
    return await fetch_markdown(
        request.url or "",
        max_bytes=MAX_DOCUMENT_SIZE,
        allowed_hosts=MDTOC_ALLOWED_HOSTS,
    )


async def process_validation(request: ValidateRequest) -> ValidateResponse:
    """Validate the TOC of the requested document."""
    options = CheckOptions(
        min_level=request.min_level,
        max_level=request.max_level,
        require_toc=request.require_toc,
    )
    try:
        text = await _load(request)
        result = check_markdown(text, options, source=request.url)
    except MdtocError as exc:
        _print_error(request.url, exc)
        return ErrorResponse(error=str(exc))

    _print_success(request.url, ok=result.report.ok, entries=len(result.report.results))

    return ValidateSuccessResponse(
        ok=result.report.ok,
        source=request.url,
        summary=result.summary,
        sections_tree=result.sections_tree,
        results=result.report.results,
        unlisted=result.report.unlisted,
    )


async def process_toc(request: DocumentRequest) -> TocResponse | ErrorResponse:
    """Generate a TOC for the requested document."""
    try:
        text = await _load(request)
    except MdtocError as exc:
        _print_error(request.url, exc)
        return ErrorResponse(error=str(exc))

    document = parse_markdown(text, source=request.url)
    toc = generate_toc(document, min_level=request.min_level, max_level=request.max_level)
    return TocResponse(toc=toc)


def _print_error(url: str | None, exc: Exception) -> None:
    """Log a failed request.

    Parameters
    ----------
    url : str | None
        The document URL, or None for inline Markdown.
    exc : Exception
        The exception raised while processing.

    """
    logger.error(
        "Validation request failed",
        extra={
            "url": url,
            "error": str(exc),
        },
    )


def _print_success(url: str | None, *, ok: bool, entries: int) -> None:
    logger.info(
        "Validation request completed",
        extra={
            "url": url,
            "ok": ok,
            "entries": entries,
        },
    )
