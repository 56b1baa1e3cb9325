"""Pydantic models for the validation API."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field, field_validator, model_validator

from mdtoc.config import MDTOC_ALLOWED_HOSTS
from mdtoc.fetch import ensure_allowed_url
from mdtoc.schemas import EntryResult, Heading
from server.server_config import MAX_DOCUMENT_SIZE


class DocumentRequest(BaseModel):
    """Request body shared by the /api/validate and /api/toc endpoints.

    Attributes
    ----------
    markdown : str | None
        Markdown source to process.
    url : str | None
        http(s) URL of a Markdown document on an allowed host, used when
        ``markdown`` is absent.
    min_level : int
        Shallowest heading level expected in the TOC.
    max_level : int
        Deepest heading level expected in the TOC.

    """

    markdown: str | None = Field(default=None, description="Markdown source")
    url: str | None = Field(default=None, description="URL of a Markdown document")
    min_level: int = Field(default=2, ge=1, le=6, description="Shallowest TOC heading level")
    max_level: int = Field(default=3, ge=1, le=6, description="Deepest TOC heading level")

    @field_validator("markdown")
    @classmethod
    def validate_markdown_size(cls, v: str | None) -> str | None:
        """Reject documents above ``MAX_DOCUMENT_SIZE``."""
        if v is not None and len(v.encode("utf-8")) > MAX_DOCUMENT_SIZE:
            err = f"markdown exceeds {MAX_DOCUMENT_SIZE // 1024} KB"
            raise ValueError(err)
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Only credential-free http(s) URLs on ``MDTOC_ALLOWED_HOSTS`` are accepted."""
        if v is None:
            return v
        return ensure_allowed_url(v.strip(), MDTOC_ALLOWED_HOSTS)

    @model_validator(mode="after")
    def check_source(self) -> "DocumentRequest":
        """Exactly one of ``markdown`` and ``url`` must be given."""
        if (self.markdown is None) == (self.url is None):
            err = "provide exactly one of markdown or url"
            raise ValueError(err)
        if self.min_level > self.max_level:
            err = "min_level must not exceed max_level"
            raise ValueError(err)
        return self


class ValidateRequest(DocumentRequest):
    """Request model for the /api/validate endpoint.

    Attributes
    ----------
    require_toc : bool
        Treat a document without a TOC as an error.

    """

    require_toc: bool = Field(default=False, description="Fail when no TOC is found")


class ValidateSuccessResponse(BaseModel):
    """Success response model for the /api/validate endpoint."""

    ok: bool = Field(..., description="True when every TOC entry resolves to one heading")
    source: str | None = Field(default=None, description="URL the document was loaded from")
    summary: str = Field(..., description="Check summary")
    sections_tree: str = Field(..., description="Section tree structure")
    results: list[EntryResult] = Field(default_factory=list, description="Per-entry results")
    unlisted: list[Heading] = Field(default_factory=list, description="Headings missing from the TOC")


class TocResponse(BaseModel):
    """Success response model for the /api/toc endpoint."""

    toc: str = Field(..., description="Generated table of contents")


class ErrorResponse(BaseModel):
    """Error response model.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.

    """

    error: str = Field(..., description="Error message")


ValidateResponse = Union[ValidateSuccessResponse, ErrorResponse]
