"""Check pipeline: load -> parse -> validate -> format."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mdtoc.exceptions import TocNotFoundError
from mdtoc.fetch import load_markdown
from mdtoc.output_formatter import create_sections_tree, format_summary
from mdtoc.parser import parse_markdown
from mdtoc.schemas import CheckResult
from mdtoc.sections import build_section_tree
from mdtoc.validator import validate_toc

logger = logging.getLogger(__name__)


@dataclass
class CheckOptions:
    """Options for a document check.

    Attributes:
        min_level: Shallowest heading level expected in the TOC.
        max_level: Deepest heading level expected in the TOC.
        require_toc: If True, a document without a TOC is an error rather
            than a vacuous pass.
        use_cache: If True, reuse a fresh cached copy of remote documents.
    """

    min_level: int = 2
    max_level: int = 3
    require_toc: bool = False
    use_cache: bool = True


def check_markdown(
    text: str,
    options: CheckOptions | None = None,
    *,
    source: str | None = None,
) -> CheckResult:
    """Parse Markdown text and validate its table of contents.

    Raises:
        TocNotFoundError: If ``require_toc`` is set and no TOC is found.
    """
    opts = options or CheckOptions()
    document = parse_markdown(text, source=source)

    if opts.require_toc and document.toc_span is None:
        raise TocNotFoundError(f"No table of contents found in {source or 'document'}")

    report = validate_toc(
        document.headings,
        document.toc_entries,
        explicit_anchors=document.explicit_anchors,
        toc_heading=document.toc_heading,
        min_level=opts.min_level,
        max_level=opts.max_level,
    )

    tree = "Sections:\n" + create_sections_tree(build_section_tree(document.headings))
    summary = format_summary(document, report)

    logger.info(
        "Checked table of contents",
        extra={
            "source": source,
            "entries": len(report.results),
            "dangling": len(report.dangling),
            "ambiguous": len(report.ambiguous),
        },
    )
    return CheckResult(summary=summary, sections_tree=tree, report=report, document=document)


async def check_document(source: str, options: CheckOptions | None = None) -> CheckResult:
    """Load a document from a path or URL and validate its table of contents.

    Raises:
        FetchError: If the document cannot be loaded.
        TocNotFoundError: If ``require_toc`` is set and no TOC is found.
    """
    opts = options or CheckOptions()
    text = await load_markdown(source, use_cache=opts.use_cache)
    return check_markdown(text, opts, source=source)
