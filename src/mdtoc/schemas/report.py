"""Validation report models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from mdtoc.schemas.document import Document, Heading, TocEntry


class AnchorStatus(str, Enum):
    """Resolution outcome for a single TOC entry."""

    OK = "ok"
    DANGLING = "dangling"
    AMBIGUOUS = "ambiguous"


class EntryResult(BaseModel):
    """Result of resolving one TOC entry against the headings."""

    entry: TocEntry
    status: AnchorStatus
    heading: Heading | None = None
    candidates: list[Heading] = Field(default_factory=list)
    message: str = ""


class ValidationReport(BaseModel):
    """Pass/fail report for a table of contents.

    ``unlisted`` holds headings no entry points to. It is informational and
    does not affect ``ok``.
    """

    results: list[EntryResult] = Field(default_factory=list)
    unlisted: list[Heading] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.status is AnchorStatus.OK for result in self.results)

    @property
    def dangling(self) -> list[EntryResult]:
        return [r for r in self.results if r.status is AnchorStatus.DANGLING]

    @property
    def ambiguous(self) -> list[EntryResult]:
        return [r for r in self.results if r.status is AnchorStatus.AMBIGUOUS]


class CheckResult(BaseModel):
    """Final output of a document check."""

    summary: str
    sections_tree: str
    report: ValidationReport
    document: Document
