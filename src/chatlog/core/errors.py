"""chatlog error types and utilities."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file in the same directory, fsyncs it,
    then atomically replaces the target path.
    """
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    closed = False
    try:
        os.write(fd, content.encode("utf-8"))
        os.fsync(fd)
        os.close(fd)
        closed = True
        os.replace(tmp, str(path))
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class ChatlogError(Exception):
    """Base exception for chatlog."""

    pass


class StoreUnavailable(ChatlogError):
    """Persisted state could not be opened or migrated.

    Fatal: the application cannot proceed without its store.
    """

    pass


class RecordIOError(ChatlogError):
    """A single record read or write failed.

    The operation is treated as not having happened.
    """

    pass


class DocumentNotFound(ChatlogError):
    """No document exists with the requested id."""

    def __init__(self, document_id: str):
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id


class UnknownFolder(ChatlogError):
    """A folder name that is not in the folder registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown folder: {name}")
        self.name = name
