"""Resolve table of contents anchors against document headings."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Sequence
from urllib.parse import unquote

from mdtoc.schemas import AnchorStatus, EntryResult, Heading, TocEntry, ValidationReport
from mdtoc.slugify import assign_slugs, slugify

logger = logging.getLogger(__name__)

HeadingLike = Heading | tuple[int, str]
EntryLike = TocEntry | tuple[str, str]


def validate_toc(
    headings: Sequence[HeadingLike],
    entries: Sequence[EntryLike],
    *,
    explicit_anchors: Iterable[str] = (),
    toc_heading: Heading | None = None,
    min_level: int = 1,
    max_level: int = 6,
) -> ValidationReport:
    """Check that every TOC entry resolves to exactly one heading.

    Slugs are derived here from the heading titles, so any ``slug`` already
    set on the inputs is ignored.

    Args:
        headings: Headings in document order, as ``Heading`` models or
            ``(level, title)`` pairs.
        entries: TOC entries in document order, as ``TocEntry`` models or
            ``(text, anchor)`` pairs.
        explicit_anchors: Ids declared in inline HTML. An entry targeting one
            of these resolves without a heading.
        toc_heading: Heading that introduces the TOC; never reported as
            unlisted.
        min_level: Shallowest heading level expected in the TOC.
        max_level: Deepest heading level expected in the TOC.

    Returns:
        A report with one result per entry, in entry order.
    """
    resolved = _with_slugs([_coerce_heading(h) for h in headings])
    by_slug = {heading.slug: heading for heading in resolved}
    by_base: dict[str, list[Heading]] = defaultdict(list)
    for heading in resolved:
        by_base[slugify(heading.title)].append(heading)
    declared = {anchor.lower() for anchor in explicit_anchors}

    results: list[EntryResult] = []
    for entry in (_coerce_entry(e) for e in entries):
        results.append(_resolve(entry, by_slug, by_base, declared))

    referenced = {r.heading.slug for r in results if r.heading is not None}
    unlisted = [
        heading
        for heading in resolved
        if min_level <= heading.level <= max_level
        and heading.slug not in referenced
        and not _is_same_heading(heading, toc_heading)
    ]

    report = ValidationReport(results=results, unlisted=unlisted)
    logger.debug(
        "Validated %d entries: %d dangling, %d ambiguous",
        len(results),
        len(report.dangling),
        len(report.ambiguous),
    )
    return report


def normalize_anchor(anchor: str) -> str:
    """Decode percent-escapes and lowercase an anchor, dropping a leading ``#``."""
    return unquote(anchor).strip().lstrip("#").lower()


def _resolve(
    entry: TocEntry,
    by_slug: dict[str, Heading],
    by_base: dict[str, list[Heading]],
    declared: set[str],
) -> EntryResult:
    anchor = normalize_anchor(entry.anchor)

    shared = by_base.get(anchor, [])
    if len(shared) > 1:
        options = ", ".join(f"#{heading.slug}" for heading in shared)
        return EntryResult(
            entry=entry,
            status=AnchorStatus.AMBIGUOUS,
            candidates=shared,
            message=f"#{anchor} is shared by {len(shared)} headings; use one of {options}",
        )

    heading = by_slug.get(anchor) if anchor else None
    if heading is not None:
        return EntryResult(entry=entry, status=AnchorStatus.OK, heading=heading)

    if anchor and anchor in declared:
        return EntryResult(
            entry=entry,
            status=AnchorStatus.OK,
            message=f"#{anchor} is declared by an inline HTML anchor",
        )

    return EntryResult(
        entry=entry,
        status=AnchorStatus.DANGLING,
        message=f"no heading matches #{anchor}",
    )


def _with_slugs(headings: list[Heading]) -> list[Heading]:
    slugs = assign_slugs(heading.title for heading in headings)
    return [heading.model_copy(update={"slug": slug}) for heading, slug in zip(headings, slugs)]


def _coerce_heading(value: HeadingLike) -> Heading:
    if isinstance(value, Heading):
        return value
    level, title = value
    return Heading(level=level, title=title, raw=title)


def _coerce_entry(value: EntryLike) -> TocEntry:
    if isinstance(value, TocEntry):
        return value
    text, anchor = value
    return TocEntry(text=text, anchor=anchor.lstrip("#"))


def _is_same_heading(heading: Heading, other: Heading | None) -> bool:
    if other is None:
        return False
    return (heading.line, heading.level, heading.title) == (other.line, other.level, other.title)
