"""Import transcript files as new documents."""

from __future__ import annotations

import re
import time
from pathlib import Path
from uuid import uuid4

from chatlog.core.models import Document

# Text extensions dropped from the display name
_TEXT_SUFFIX_RE = re.compile(r"\.(md|markdown|txt)$", re.IGNORECASE)


def derive_name(filename: str) -> str:
    """Display name for an imported file: the filename minus a text extension."""
    return _TEXT_SUFFIX_RE.sub("", filename)


def decode_text(raw: bytes) -> str:
    """Decode file bytes as UTF-8, dropping a BOM and replacing bad bytes."""
    return raw.decode("utf-8-sig", errors="replace")


def read_transcript(path: Path) -> str:
    """Read a transcript file from disk."""
    return decode_text(path.read_bytes())


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def new_document(filename: str, content: str, added_at: int | None = None) -> Document:
    """Create a fresh, uncategorized document for imported text."""
    return Document(
        id=uuid4().hex,
        name=derive_name(filename),
        content=content,
        added_at=now_ms() if added_at is None else added_at,
    )
