"""Parse Markdown into headings, code blocks and table of contents entries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from mdtoc.config import MDTOC_TOC_TITLES
from mdtoc.html_utils import find_explicit_anchors, has_inline_html, html_to_text
from mdtoc.schemas import CodeBlock, Document, Heading, TocEntry
from mdtoc.sections import normalize_section_title
from mdtoc.slugify import assign_slugs

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_CLOSING_SEQUENCE_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")

# Link text may hold escaped brackets or one level of nested ``[...]``.
_LINK_TEXT = r"(?:\\.|[^\[\]\\]|\[[^\]]*\])"
_IMAGE_RE = re.compile(rf"!\[({_LINK_TEXT}*)\]\([^)]*\)")
_LINK_RE = re.compile(rf"\[({_LINK_TEXT}*)\]\([^)]*\)")
_EMPHASIS_RE = re.compile(r"\*+|~~")
_CODE_SPAN_RE = re.compile(r"(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)")
_ESCAPE_RE = re.compile(r"\\([!-/:-@\[-`{-~])")
_PLACEHOLDER_RE = re.compile("\ue000(\\d+)\ue001")

_TOC_LINK_RE = re.compile(rf"\[({_LINK_TEXT}+)\]\(#([^)\s]*)\)")
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+")


@dataclass
class _ScanState:
    """Line-level facts gathered in a single pass."""

    headings: list[tuple[int, Heading]] = field(default_factory=list)
    code_blocks: list[CodeBlock] = field(default_factory=list)
    in_code: list[bool] = field(default_factory=list)


def parse_markdown(
    text: str,
    *,
    source: str | None = None,
    toc_titles: Iterable[str] | None = None,
) -> Document:
    """Parse Markdown text into a ``Document``.

    Args:
        text: The Markdown source.
        source: Optional path or URL recorded on the result.
        toc_titles: Heading titles that introduce a table of contents.
            Defaults to ``MDTOC_TOC_TITLES``.

    Returns:
        The parsed document with heading slugs assigned.
    """
    lines = text.splitlines()
    state = _scan(lines)

    headings = [heading for _, heading in state.headings]
    for heading, slug in zip(headings, assign_slugs(h.title for h in headings)):
        heading.slug = slug

    titles = {
        normalize_section_title(title)
        for title in (toc_titles if toc_titles is not None else MDTOC_TOC_TITLES)
    }
    toc_heading, toc_span = _locate_toc(lines, state, titles)
    toc_entries = _extract_toc_entries(lines, state.in_code, toc_span)

    explicit_anchors: list[str] = []
    for index, line in enumerate(lines):
        if state.in_code[index] or not has_inline_html(line):
            continue
        for anchor in find_explicit_anchors(line):
            if anchor not in explicit_anchors:
                explicit_anchors.append(anchor)

    return Document(
        headings=headings,
        code_blocks=state.code_blocks,
        toc_entries=toc_entries,
        toc_heading=toc_heading,
        toc_span=toc_span,
        explicit_anchors=explicit_anchors,
        source=source,
    )


def render_heading_text(raw: str) -> str:
    """Render heading source to the plain text a Markdown viewer shows.

    Code spans and backslash escapes are shown literally, so they are set
    aside before links, HTML and emphasis are stripped from the rest.
    """
    spans: list[str] = []

    def stash_literal(content: str) -> str:
        spans.append(content)
        return "\ue000" + str(len(spans) - 1) + "\ue001"

    def stash(match: re.Match[str]) -> str:
        content = match.group(2)
        if len(content) > 1 and content.startswith(" ") and content.endswith(" ") and content.strip():
            content = content[1:-1]
        return stash_literal(content)

    text = _CODE_SPAN_RE.sub(stash, raw)
    text = _ESCAPE_RE.sub(lambda match: stash_literal(match.group(1)), text)
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = html_to_text(text)
    text = text.replace("`", "")
    text = _EMPHASIS_RE.sub("", text)
    text = _PLACEHOLDER_RE.sub(lambda match: spans[int(match.group(1))], text)
    return text.strip()


def _scan(lines: list[str]) -> _ScanState:
    state = _ScanState()
    fence: str | None = None
    fence_start = 0
    language: str | None = None
    body: list[str] = []

    for index, line in enumerate(lines):
        if fence is not None:
            state.in_code.append(True)
            close = _FENCE_CLOSE_RE.match(line)
            if close and close.group(1)[0] == fence[0] and len(close.group(1)) >= len(fence):
                state.code_blocks.append(
                    CodeBlock(language=language, content="\n".join(body), line=fence_start + 1)
                )
                fence = None
            else:
                body.append(line)
            continue

        opening = _FENCE_OPEN_RE.match(line)
        if opening and not (opening.group(1)[0] == "`" and "`" in opening.group(2)):
            fence = opening.group(1)
            fence_start = index
            info = opening.group(2).strip()
            language = info.split()[0] if info else None
            body = []
            state.in_code.append(True)
            continue

        state.in_code.append(False)
        match = _HEADING_RE.match(line)
        if not match:
            continue
        raw = _CLOSING_SEQUENCE_RE.sub("", match.group(2) or "").strip()
        title = render_heading_text(raw)
        if not title:
            continue
        state.headings.append(
            (index, Heading(level=len(match.group(1)), title=title, raw=raw, line=index + 1))
        )

    # An unclosed fence runs to the end of the document.
    if fence is not None:
        state.code_blocks.append(
            CodeBlock(language=language, content="\n".join(body), line=fence_start + 1)
        )
    return state


def _locate_toc(
    lines: list[str], state: _ScanState, titles: set[str]
) -> tuple[Heading | None, tuple[int, int] | None]:
    for position, (index, heading) in enumerate(state.headings):
        if normalize_section_title(heading.title) not in titles:
            continue
        end = len(lines)
        for next_index, next_heading in state.headings[position + 1 :]:
            if next_heading.level <= heading.level:
                end = next_index
                break
        return heading, (index + 1, end)

    return None, _find_link_list(lines, state.in_code)


def _find_link_list(lines: list[str], in_code: list[bool]) -> tuple[int, int] | None:
    """Find the first run of list items that each carry an internal link."""
    start: int | None = None
    for index, line in enumerate(lines):
        is_link_item = (
            not in_code[index]
            and _LIST_ITEM_RE.match(line) is not None
            and _TOC_LINK_RE.search(line) is not None
        )
        if is_link_item and start is None:
            start = index
        elif not is_link_item and start is not None:
            return start, index
    if start is not None:
        return start, len(lines)
    return None


def _extract_toc_entries(
    lines: list[str], in_code: list[bool], span: tuple[int, int] | None
) -> list[TocEntry]:
    if span is None:
        return []
    entries: list[TocEntry] = []
    start, end = span
    for index in range(start, end):
        if in_code[index]:
            continue
        for match in _TOC_LINK_RE.finditer(lines[index]):
            entries.append(
                TocEntry(
                    text=_unescape_brackets(match.group(1)).strip(),
                    anchor=match.group(2),
                    line=index + 1,
                )
            )
    return entries


def _unescape_brackets(text: str) -> str:
    return text.replace("\\[", "[").replace("\\]", "]")
