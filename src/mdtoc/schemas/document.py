"""Parsed Markdown document models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Heading(BaseModel):
    """An ATX heading.

    Attributes:
        level: Heading depth, 1 for ``#`` through 6 for ``######``.
        title: Rendered plain text of the heading.
        raw: Source text after the ``#`` markers, closing sequence removed.
        line: 1-based source line.
        slug: Derived anchor, disambiguated against earlier headings.
    """

    level: int = Field(..., ge=1, le=6)
    title: str
    raw: str = ""
    line: int = 0
    slug: str = ""


class CodeBlock(BaseModel):
    """A fenced code block. Its content is never interpreted."""

    language: str | None = None
    content: str = ""
    line: int = 0


class TocEntry(BaseModel):
    """A table of contents link of the form ``[text](#anchor)``."""

    text: str
    anchor: str
    line: int = 0


class Document(BaseModel):
    """A Markdown document reduced to the parts mdtoc cares about.

    Attributes:
        headings: Headings in document order, with slugs assigned.
        code_blocks: Fenced code blocks in document order.
        toc_entries: Links found in the table of contents.
        toc_heading: Heading that introduces the table of contents, if any.
        toc_span: 0-based ``(start, end)`` line range of the TOC body.
        explicit_anchors: Ids declared with inline ``<a id>``/``<a name>`` tags.
        source: Path or URL the document was loaded from.
    """

    headings: list[Heading] = Field(default_factory=list)
    code_blocks: list[CodeBlock] = Field(default_factory=list)
    toc_entries: list[TocEntry] = Field(default_factory=list)
    toc_heading: Heading | None = None
    toc_span: tuple[int, int] | None = None
    explicit_anchors: list[str] = Field(default_factory=list)
    source: str | None = None
