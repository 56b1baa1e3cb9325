"""Generate and rewrite a document's table of contents."""

from __future__ import annotations

from mdtoc.config import MDTOC_TOC_TITLES
from mdtoc.exceptions import TocNotFoundError
from mdtoc.schemas import Document, SectionNode
from mdtoc.sections import build_section_tree, filter_sections


def generate_toc(document: Document, *, min_level: int = 2, max_level: int = 3) -> str:
    """Render a nested bullet list linking every heading in the level range.

    The heading that introduces the TOC is left out, as are headings titled
    like one.
    """
    headings = [
        heading
        for heading in document.headings
        if min_level <= heading.level <= max_level
        and not (document.toc_heading and heading.line == document.toc_heading.line)
    ]
    sections = filter_sections(
        build_section_tree(headings), mode="exclude", selected=MDTOC_TOC_TITLES
    )
    return _render_toc(sections)


def rewrite_toc(text: str, document: Document, toc: str) -> str:
    """Replace the TOC body in ``text`` with ``toc``.

    Raises:
        TocNotFoundError: If the document has no TOC section.
    """
    if document.toc_span is None:
        raise TocNotFoundError(f"No table of contents found in {document.source or 'document'}")

    lines = text.splitlines()
    start, end = document.toc_span
    replacement = toc.splitlines()
    if document.toc_heading is not None:
        # Keep one blank line between the TOC heading, the list and what follows.
        replacement = [""] + replacement + [""]
    new_lines = lines[:start] + replacement + lines[end:]
    trailing_newline = "\n" if text.endswith("\n") else ""
    return "\n".join(new_lines) + trailing_newline


def _render_toc(sections: list[SectionNode], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        prefix = "  " * indent + "- "
        title = section.title.replace("[", "\\[").replace("]", "\\]")
        lines.append(f"{prefix}[{title}](#{section.anchor or ''})")
        if section.children:
            lines.append(_render_toc(section.children, indent + 1))
    return "\n".join(lines)
