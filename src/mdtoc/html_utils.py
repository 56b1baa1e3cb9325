"""Shared helpers for inline HTML embedded in Markdown."""

from __future__ import annotations

import re

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_TAG_RE = re.compile(r"</?[A-Za-z][^>]*>")
_ENTITY_RE = re.compile(r"&(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def has_inline_html(text: str) -> bool:
    """Return True when the text contains something that looks like a tag."""
    return bool(_TAG_RE.search(text))


def html_to_text(fragment: str) -> str:
    """Reduce an inline HTML fragment to its visible text.

    Character references such as `&amp;` are decoded even without tags.
    """
    if not has_inline_html(fragment) and not _ENTITY_RE.search(fragment):
        return fragment
    soup = BeautifulSoup(fragment, "lxml")
    return soup.get_text()


def find_explicit_anchors(fragment: str) -> list[str]:
    """Collect ids declared by ``<a id="...">`` or ``<a name="...">`` tags.

    Only anchor tags count; ids on other elements are ignored.
    """
    if not has_inline_html(fragment):
        return []
    soup = BeautifulSoup(fragment, "lxml")
    anchors: list[str] = []
    for tag in soup.find_all("a"):
        for attr in ("id", "name"):
            value = tag.get(attr)
            if value and value not in anchors:
                anchors.append(value)
    return anchors
