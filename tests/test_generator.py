"""Tests for TOC generation and rewriting."""

from __future__ import annotations

import pytest

from mdtoc.exceptions import TocNotFoundError
from mdtoc.generator import generate_toc, rewrite_toc
from mdtoc.parser import parse_markdown
from mdtoc.validator import validate_toc


class TestGenerateToc:
    """Tests for generate_toc function."""

    def test_nested_list(self) -> None:
        doc = parse_markdown("# Title\n## Tables\n### Arrays (1-indexed!)\n## Sound\n")

        assert generate_toc(doc) == "\n".join(
            [
                "- [Tables](#tables)",
                "  - [Arrays (1-indexed!)](#arrays-1-indexed)",
                "- [Sound](#sound)",
            ]
        )

    def test_toc_heading_is_excluded(self, sample_markdown: str) -> None:
        doc = parse_markdown(sample_markdown)

        assert generate_toc(doc) == "- [Setup](#setup)\n- [Usage](#usage)\n- [Extra](#extra)"

    def test_level_range(self) -> None:
        doc = parse_markdown("# A\n## B\n### C\n#### D\n")

        assert generate_toc(doc, min_level=1, max_level=2) == "- [A](#a)\n  - [B](#b)"

    def test_duplicates_link_to_disambiguated_slugs(self) -> None:
        doc = parse_markdown("## Example\n## Example\n")

        assert generate_toc(doc) == "- [Example](#example)\n- [Example](#example-1)"

    def test_generated_toc_validates(self, cheatsheet_text: str) -> None:
        """Every generated link resolves against the same document."""
        doc = parse_markdown(cheatsheet_text)
        toc_doc = parse_markdown("## Contents\n" + generate_toc(doc))

        report = validate_toc(doc.headings, toc_doc.toc_entries)

        assert report.ok
        assert len(report.results) == 22

    def test_brackets_in_titles_are_escaped(self) -> None:
        doc = parse_markdown("## Arrays [1-indexed]\n## Loops\n")

        toc = generate_toc(doc)
        toc_doc = parse_markdown("## Contents\n" + toc)

        assert toc == "- [Arrays \\[1-indexed\\]](#arrays-1-indexed)\n- [Loops](#loops)"
        assert [e.text for e in toc_doc.toc_entries] == ["Arrays [1-indexed]", "Loops"]
        assert validate_toc(doc.headings, toc_doc.toc_entries).ok

    def test_empty_document(self) -> None:
        assert generate_toc(parse_markdown("")) == ""


class TestRewriteToc:
    """Tests for rewrite_toc function."""

    def test_replaces_toc_body(self) -> None:
        text = "# Doc\n\n## Contents\n\n- [Old](#old)\n\n## New\n\nBody\n"
        doc = parse_markdown(text)

        result = rewrite_toc(text, doc, generate_toc(doc))

        assert result == "# Doc\n\n## Contents\n\n- [New](#new)\n\n## New\n\nBody\n"

    def test_untitled_list_is_replaced_in_place(self) -> None:
        text = "Intro\n- [Old](#old)\n## New"
        doc = parse_markdown(text)

        result = rewrite_toc(text, doc, "- [New](#new)")

        assert result == "Intro\n- [New](#new)\n## New"

    def test_raises_without_toc(self) -> None:
        text = "## A\n"
        doc = parse_markdown(text, source="a.md")

        with pytest.raises(TocNotFoundError, match="a.md"):
            rewrite_toc(text, doc, "- [A](#a)")
