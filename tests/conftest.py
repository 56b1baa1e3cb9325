"""Test setup for mdtoc."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

CHEATSHEET = ROOT / "docs" / "pico8-lua-cheatsheet.md"


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop the handler configure_logging installs so no test sees a stale stream."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == "mdtoc"]:
        root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def cheatsheet_path() -> Path:
    """Path to the bundled cheatsheet."""
    return CHEATSHEET


@pytest.fixture
def cheatsheet_text() -> str:
    """Markdown source of the bundled cheatsheet."""
    return CHEATSHEET.read_text(encoding="utf-8")


@pytest.fixture
def sample_markdown() -> str:
    """Small document with a TOC, a code block and one broken link."""
    return "\n".join(
        [
            "# Guide",
            "",
            "## Contents",
            "",
            "- [Setup](#setup)",
            "- [Usage](#usage)",
            "- [Missing](#non-existent-section)",
            "",
            "## Setup",
            "",
            "```sh",
            "# not a heading",
            "```",
            "",
            "## Usage",
            "",
            "## Extra",
            "",
        ]
    )
