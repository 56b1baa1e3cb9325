"""Server configuration."""

from __future__ import annotations

import os

MAX_DOCUMENT_SIZE_KB = int(os.getenv("MAX_DOCUMENT_SIZE_KB", "1024"))
MAX_DOCUMENT_SIZE = MAX_DOCUMENT_SIZE_KB * 1024
