"""mdtoc: validate table of contents anchors in Markdown documents."""

from mdtoc.checker import CheckOptions, check_document, check_markdown
from mdtoc.exceptions import (
    DocumentNotFoundError,
    FetchError,
    MdtocError,
    ParseError,
    TocNotFoundError,
)
from mdtoc.generator import generate_toc, rewrite_toc
from mdtoc.parser import parse_markdown
from mdtoc.schemas import AnchorStatus, CheckResult, Document, Heading, TocEntry, ValidationReport
from mdtoc.slugify import assign_slugs, slugify
from mdtoc.validator import validate_toc

__all__ = [
    "AnchorStatus",
    "CheckOptions",
    "CheckResult",
    "Document",
    "DocumentNotFoundError",
    "FetchError",
    "Heading",
    "MdtocError",
    "ParseError",
    "TocEntry",
    "TocNotFoundError",
    "ValidationReport",
    "assign_slugs",
    "check_document",
    "check_markdown",
    "generate_toc",
    "parse_markdown",
    "rewrite_toc",
    "slugify",
    "validate_toc",
]
