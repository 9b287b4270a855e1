"""chatlog - a local library of AI chat transcripts.

Usage:
    from chatlog import Library, get_settings

    async with await Library.open(get_settings()) as library:
        doc = await library.import_text("session.md", text)
        opened = await library.open_document(doc.id)
        for exchange in opened.exchanges:
            print(exchange.question, exchange.answer)
"""

from chatlog.config import Settings, get_settings
from chatlog.core.errors import (
    ChatlogError,
    DocumentNotFound,
    RecordIOError,
    StoreUnavailable,
    UnknownFolder,
)
from chatlog.core.models import Document, DocumentSummary, Exchange, OpenedDocument
from chatlog.library import Library
from chatlog.services.catalog import FolderFilter, view
from chatlog.services.documents import DocumentStore
from chatlog.services.folders import FolderRegistry
from chatlog.transcript.parser import parse_conversation

__all__ = [
    "ChatlogError",
    "Document",
    "DocumentNotFound",
    "DocumentStore",
    "DocumentSummary",
    "Exchange",
    "FolderFilter",
    "FolderRegistry",
    "Library",
    "OpenedDocument",
    "RecordIOError",
    "Settings",
    "StoreUnavailable",
    "UnknownFolder",
    "get_settings",
    "parse_conversation",
    "view",
]
