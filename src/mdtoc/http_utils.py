"""HTTP utilities for fetching documents with retry logic."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Collection, Final

import httpx

from mdtoc.config import (
    MDTOC_FETCH_BACKOFF_S,
    MDTOC_FETCH_MAX_RETRIES,
    MDTOC_FETCH_TIMEOUT_S,
    MDTOC_MAX_DOCUMENT_BYTES,
    MDTOC_USER_AGENT,
)
from mdtoc.exceptions import DocumentRejectedError, FetchError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

# Raw Markdown hosts commonly serve text/plain or a generic binary type.
ACCEPTED_CONTENT_TYPES: Final[frozenset[str]] = frozenset(
    {"text/markdown", "text/x-markdown", "text/plain", "application/octet-stream"}
)

_MAX_REDIRECTS: Final[int] = 5


async def fetch_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
    max_bytes: int | None = None,
    allowed_hosts: Collection[str] | None = None,
) -> str:
    """Fetch text from a URL, retrying transient failures.

    The body is streamed and refused once it grows past ``max_bytes``.
    Responses whose content type is not plain text or Markdown are refused
    as well. Refusals are not retried.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.
        on_404: Exception class to raise on 404. Defaults to FetchError.
        on_404_message: Error message for 404 responses. If None, a generic
            message is used.
        max_bytes: Largest accepted body. Defaults to
            ``MDTOC_MAX_DOCUMENT_BYTES``.
        allowed_hosts: When given, every request the new client makes,
            redirects included, must target one of these hosts.

    Returns:
        The decoded response body.

    Raises:
        DocumentRejectedError: If the host, size or content type is refused.
        FetchError (or the on_404 exception): If the fetch fails after all
            retries or returns 404.
    """
    timeout = httpx.Timeout(MDTOC_FETCH_TIMEOUT_S)
    headers = {"User-Agent": MDTOC_USER_AGENT}
    limit = max_bytes if max_bytes is not None else MDTOC_MAX_DOCUMENT_BYTES
    last_exc: Exception | None = None
    not_found_exc_class = on_404 or FetchError

    async def do_fetch(http_client: httpx.AsyncClient) -> str:
        nonlocal last_exc

        for attempt in range(MDTOC_FETCH_MAX_RETRIES + 1):
            try:
                async with http_client.stream("GET", url) as response:
                    if response.status_code == 404:
                        message = on_404_message or f"Resource not found at {url}"
                        raise not_found_exc_class(message)

                    if response.status_code in RETRY_STATUS_CODES:
                        last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                    else:
                        response.raise_for_status()
                        return await _read_body(response, url, limit)
            except (httpx.RequestError, httpx.HTTPStatusError) as exc:
                last_exc = exc

            if attempt < MDTOC_FETCH_MAX_RETRIES:
                backoff = MDTOC_FETCH_BACKOFF_S * (2**attempt)
                logger.debug("Retrying %s in %.1fs after: %s", url, backoff, last_exc)
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    event_hooks = {}
    if allowed_hosts is not None:
        event_hooks["request"] = [host_guard(allowed_hosts)]

    async with httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
        event_hooks=event_hooks,
    ) as new_client:
        return await do_fetch(new_client)


def host_guard(allowed_hosts: Collection[str]) -> Callable[[httpx.Request], Awaitable[None]]:
    """Build a request hook that refuses hosts outside ``allowed_hosts``."""
    allowed = {host.lower() for host in allowed_hosts}

    async def check_host(request: httpx.Request) -> None:
        host = request.url.host.lower()
        if host not in allowed:
            raise DocumentRejectedError(f"Unsupported host: {host}")

    return check_host


async def _read_body(response: httpx.Response, url: str, max_bytes: int) -> str:
    media_type = response.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if media_type and media_type not in ACCEPTED_CONTENT_TYPES:
        raise DocumentRejectedError(f"Unsupported content type {media_type!r} from {url}")

    declared = response.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise DocumentRejectedError(f"Document at {url} exceeds {max_bytes} bytes")

    body = bytearray()
    async for chunk in response.aiter_bytes():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise DocumentRejectedError(f"Document at {url} exceeds {max_bytes} bytes")

    encoding = response.charset_encoding or "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
