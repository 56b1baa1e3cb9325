"""Shared schemas for mdtoc."""

from mdtoc.schemas.document import CodeBlock, Document, Heading, TocEntry
from mdtoc.schemas.report import AnchorStatus, CheckResult, EntryResult, ValidationReport
from mdtoc.schemas.sections import SectionNode

__all__ = [
    "AnchorStatus",
    "CheckResult",
    "CodeBlock",
    "Document",
    "EntryResult",
    "Heading",
    "SectionNode",
    "TocEntry",
    "ValidationReport",
]
