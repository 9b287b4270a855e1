"""Core data models for chatlog."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Document:
    """One imported transcript, stored as a single record."""

    id: str
    name: str
    content: str
    added_at: int  # milliseconds since epoch
    folder: str = ""  # "" means uncategorized

    def with_folder(self, folder: str) -> Document:
        """Return a copy assigned to ``folder``."""
        return Document(
            id=self.id,
            name=self.name,
            content=self.content,
            added_at=self.added_at,
            folder=folder,
        )


@dataclass(frozen=True)
class Exchange:
    """One question/answer pair derived from a document's content."""

    question: str = ""
    answer: str = ""


@dataclass
class DocumentSummary:
    """Catalog line for a document: counts and preview text."""

    document: Document
    exchange_count: int
    preview: str


@dataclass
class OpenedDocument:
    """A document opened for reading, with its exchanges re-derived."""

    document: Document
    exchanges: list[Exchange] = field(default_factory=list)
    scroll_offset: int = 0
