"""Format documents and validation reports as plain text."""

from __future__ import annotations

from mdtoc.schemas import AnchorStatus, Document, EntryResult, SectionNode, ValidationReport
from mdtoc.sections import build_section_tree, count_sections

_STATUS_LABELS = {
    AnchorStatus.OK: "OK",
    AnchorStatus.DANGLING: "DANGLING",
    AnchorStatus.AMBIGUOUS: "AMBIGUOUS",
}


def format_summary(document: Document, report: ValidationReport) -> str:
    """Create a short summary of the document and its TOC check."""
    sections = build_section_tree(document.headings)
    summary_lines = []
    if document.source:
        summary_lines.append(f"Source: {document.source}")
    summary_lines.append(f"Sections: {count_sections(sections)}")
    summary_lines.append(f"Code blocks: {len(document.code_blocks)}")
    if document.toc_heading is not None:
        summary_lines.append(f"TOC: {document.toc_heading.title} (line {document.toc_heading.line})")
    elif document.toc_entries:
        summary_lines.append("TOC: untitled link list")
    else:
        summary_lines.append("TOC: not found")
    summary_lines.append(f"Entries: {len(report.results)}")
    summary_lines.append(f"Dangling: {len(report.dangling)}")
    summary_lines.append(f"Ambiguous: {len(report.ambiguous)}")
    summary_lines.append(f"Result: {'passed' if report.ok else 'failed'}")
    return "\n".join(summary_lines)


def format_report(report: ValidationReport) -> str:
    """One line per TOC entry, followed by headings no entry points to."""
    lines = [_format_result(result) for result in report.results]
    if report.unlisted:
        lines.append("")
        lines.append("Headings not in TOC:")
        for heading in report.unlisted:
            lines.append(f"  line {heading.line}: {'#' * heading.level} {heading.title} (#{heading.slug})")
    return "\n".join(lines)


def create_sections_tree(sections: list[SectionNode], indent: int = 0) -> str:
    """Render the section tree with four spaces per level."""
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + section.title)
        if section.children:
            lines.append(create_sections_tree(section.children, indent + 1))
    return "\n".join(lines)


def _format_result(result: EntryResult) -> str:
    entry = result.entry
    line = f"{_STATUS_LABELS[result.status]:<9} line {entry.line}: [{entry.text}](#{entry.anchor})"
    if result.message:
        line += f" - {result.message}"
    return line
