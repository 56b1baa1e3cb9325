"""Local configuration for mdtoc."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CACHE_DIR = ".mdtoc_cache"
DEFAULT_CACHE_TTL_SECONDS = 60 * 60
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "mdtoc/0.1 (+https://github.com/mdtoc/mdtoc)"
DEFAULT_TOC_TITLES = "table of contents,contents,toc"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_DOCUMENT_BYTES = 5 * 1024 * 1024
DEFAULT_ALLOWED_HOSTS = (
    "raw.githubusercontent.com,gist.githubusercontent.com,gitlab.com,bitbucket.org,codeberg.org"
)

# Local-only cache directory for fetched remote documents.
MDTOC_CACHE_PATH = Path(os.getenv("MDTOC_CACHE_PATH", DEFAULT_CACHE_DIR)).expanduser().resolve()
MDTOC_CACHE_TTL_SECONDS = int(os.getenv("MDTOC_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)))
MDTOC_FETCH_TIMEOUT_S = float(os.getenv("MDTOC_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
MDTOC_FETCH_MAX_RETRIES = int(os.getenv("MDTOC_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
MDTOC_FETCH_BACKOFF_S = float(os.getenv("MDTOC_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
MDTOC_USER_AGENT = os.getenv("MDTOC_USER_AGENT", DEFAULT_USER_AGENT)
# Remote bodies larger than this are refused while streaming.
MDTOC_MAX_DOCUMENT_BYTES = int(
    os.getenv("MDTOC_MAX_DOCUMENT_BYTES", str(DEFAULT_MAX_DOCUMENT_BYTES))
)
# Hosts the API server may fetch from.
MDTOC_ALLOWED_HOSTS = frozenset(
    host.strip().lower()
    for host in os.getenv("MDTOC_ALLOWED_HOSTS", DEFAULT_ALLOWED_HOSTS).split(",")
    if host.strip()
)
# Heading titles (normalized) that introduce a table of contents.
MDTOC_TOC_TITLES = frozenset(
    title.strip().lower()
    for title in os.getenv("MDTOC_TOC_TITLES", DEFAULT_TOC_TITLES).split(",")
    if title.strip()
)
MDTOC_LOG_LEVEL = os.getenv("MDTOC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
