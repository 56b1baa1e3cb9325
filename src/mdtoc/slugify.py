"""Heading slug derivation."""

from __future__ import annotations

import re
from typing import Iterable

_DISALLOWED_RE = re.compile(r"[^a-z0-9\- ]")


def slugify(title: str) -> str:
    """Derive the anchor slug for a heading title.

    Lowercases, drops everything outside ``[a-z0-9- ]`` and turns each space
    into a hyphen. Applying it to its own output is a no-op.

    >>> slugify("Arrays (1-indexed!)")
    'arrays-1-indexed'
    """
    slug = title.strip().lower()
    slug = _DISALLOWED_RE.sub("", slug)
    return slug.replace(" ", "-")


def assign_slugs(titles: Iterable[str]) -> list[str]:
    """Slug every title, disambiguating repeats with ``-1``, ``-2``, ...

    A candidate suffix that collides with a slug already handed out is
    bumped until it is free.
    """
    used: set[str] = set()
    counters: dict[str, int] = {}
    slugs: list[str] = []
    for title in titles:
        base = slugify(title)
        slug = base
        if slug in used:
            count = counters.get(base, 0)
            while slug in used:
                count += 1
                slug = f"{base}-{count}"
            counters[base] = count
        used.add(slug)
        slugs.append(slug)
    return slugs
