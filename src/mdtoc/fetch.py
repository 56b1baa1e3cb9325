"""Load Markdown documents from disk or over HTTP."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Collection
from urllib.parse import urlparse

from mdtoc.cache_utils import (
    cache_dir_for,
    is_cache_fresh,
    mkdir_async,
    read_text_async,
    write_text_async,
)
from mdtoc.config import MDTOC_CACHE_PATH, MDTOC_CACHE_TTL_SECONDS
from mdtoc.exceptions import DocumentNotFoundError, FetchError
from mdtoc.http_utils import fetch_with_retries

logger = logging.getLogger(__name__)


def is_remote_source(source: str) -> bool:
    """Return True for ``http``/``https`` URLs."""
    return urlparse(source).scheme in {"http", "https"}


def ensure_allowed_url(url: str, allowed_hosts: Collection[str]) -> str:
    """Check that ``url`` is an http(s) URL on one of ``allowed_hosts``.

    Raises:
        ValueError: If the scheme, credentials or host are not acceptable.
    """
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError("url must start with http:// or https://")
    if parsed.username is not None or parsed.password is not None:
        raise ValueError("URLs with credentials are not allowed")
    host = (parsed.hostname or "").lower()
    if host not in {allowed.lower() for allowed in allowed_hosts}:
        raise ValueError(f"Unsupported host: {host or url}")
    return url


async def load_markdown(source: str, *, use_cache: bool = True) -> str:
    """Read Markdown from a local path or a remote URL.

    Raises:
        DocumentNotFoundError: If the file or URL does not exist.
        FetchError: If the document cannot be read.
    """
    if is_remote_source(source):
        return await fetch_markdown(source, use_cache=use_cache)

    path = Path(source)
    if not path.is_file():
        raise DocumentNotFoundError(f"Markdown file not found: {path}")
    try:
        return await read_text_async(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(f"Failed to read {path}: {exc}") from exc


async def fetch_markdown(
    url: str,
    *,
    use_cache: bool = True,
    max_bytes: int | None = None,
    allowed_hosts: Collection[str] | None = None,
) -> str:
    """Fetch a remote Markdown document and cache it locally.

    Args:
        url: URL of the raw Markdown file.
        use_cache: Whether to use a cached copy if it is still fresh.
        max_bytes: Largest accepted document, cached copies included.
        allowed_hosts: Hosts the fetch and its redirects may reach.

    Returns:
        The Markdown source.

    Raises:
        DocumentNotFoundError: If the server answers 404.
        DocumentRejectedError: If the host, size or content type is refused.
        FetchError: If a network error persists after retries.
    """
    cache_dir = cache_dir_for(url, MDTOC_CACHE_PATH)
    cached_path = cache_dir / "document.md"

    if (
        use_cache
        and is_cache_fresh(cached_path, MDTOC_CACHE_TTL_SECONDS)
        and (max_bytes is None or cached_path.stat().st_size <= max_bytes)
    ):
        logger.debug("Using cached copy of %s", url)
        return await read_text_async(cached_path)

    text = await fetch_with_retries(
        url,
        on_404=DocumentNotFoundError,
        on_404_message=f"Markdown document not found at {url}",
        max_bytes=max_bytes,
        allowed_hosts=allowed_hosts,
    )
    await mkdir_async(cache_dir, parents=True, exist_ok=True)
    await write_text_async(cached_path, text)
    return text
