"""Small persisted key/value state kept outside the document store.

Holds the folder registry list and per-document scroll offsets in one JSON
file, rewritten atomically on every change.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from chatlog.core.errors import RecordIOError, StoreUnavailable, atomic_write

logger = logging.getLogger(__name__)

FOLDERS_KEY = "folders"
SCROLL_POS_PREFIX = "scrollPos_"


def scroll_key(document_id: str) -> str:
    """Preferences key for a document's saved scroll offset."""
    return f"{SCROLL_POS_PREFIX}{document_id}"


class Preferences:
    """JSON-file backed string-keyed values."""

    def __init__(self, path: Path, values: dict[str, Any] | None = None):
        self.path = path
        self._values: dict[str, Any] = values or {}

    @classmethod
    def load(cls, path: Path) -> Preferences:
        """Load preferences from ``path``; a missing file means no values.

        Raises:
            StoreUnavailable: If the file exists but cannot be read or parsed.
        """
        if not path.exists():
            return cls(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StoreUnavailable(f"Cannot read preferences at {path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreUnavailable(f"Preferences at {path} are not a JSON object")
        return cls(path, data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._save({**self._values, key: value})

    def remove(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""
        if key in self._values:
            self._save({k: v for k, v in self._values.items() if k != key})

    def _save(self, values: dict[str, Any]) -> None:
        """Write ``values`` to disk, then make them current.

        Raises:
            RecordIOError: If the file cannot be written; nothing changes.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write(self.path, json.dumps(values, ensure_ascii=False, indent=2))
        except OSError as e:
            raise RecordIOError(f"Cannot write preferences at {self.path}: {e}") from e
        self._values = values
        logger.debug("Saved preferences to %s", self.path)

    # Scroll offsets ---------------------------------------------------------

    def get_scroll_offset(self, document_id: str) -> int:
        value = self.get(scroll_key(document_id), 0)
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    def set_scroll_offset(self, document_id: str, offset: int) -> None:
        self.set(scroll_key(document_id), int(offset))

    def clear_scroll_offset(self, document_id: str) -> None:
        self.remove(scroll_key(document_id))
