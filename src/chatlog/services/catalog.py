"""Catalog view: the filtered, sorted list of documents shown to the user."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from chatlog.core.models import Document


class FolderMode(str, Enum):
    ALL = "all"
    UNCATEGORIZED = "uncategorized"
    NAMED = "named"


@dataclass(frozen=True)
class FolderFilter:
    """Which folder the catalog is restricted to."""

    mode: FolderMode = FolderMode.ALL
    name: str = ""

    @classmethod
    def all(cls) -> FolderFilter:
        return cls(FolderMode.ALL)

    @classmethod
    def uncategorized(cls) -> FolderFilter:
        return cls(FolderMode.UNCATEGORIZED)

    @classmethod
    def named(cls, name: str) -> FolderFilter:
        return cls(FolderMode.NAMED, name)

    def matches(self, doc: Document, known_folders: set[str]) -> bool:
        if self.mode is FolderMode.ALL:
            return True
        if self.mode is FolderMode.UNCATEGORIZED:
            # Orphaned references count as uncategorized
            return not doc.folder or doc.folder not in known_folders
        return doc.folder == self.name


def sort_documents(documents: Iterable[Document]) -> list[Document]:
    """Most recently added first. Ties keep their incoming order."""
    return sorted(documents, key=lambda d: d.added_at, reverse=True)


def matches_search(doc: Document, query: str) -> bool:
    """Case-insensitive substring match on name or content."""
    q = query.strip().lower()
    if not q:
        return True
    return q in doc.name.lower() or q in doc.content.lower()


def view(
    documents: Iterable[Document],
    folder_filter: FolderFilter,
    query: str,
    known_folders: Iterable[str] = (),
) -> list[Document]:
    """Filter documents by folder AND search query.

    Args:
        documents: All documents.
        folder_filter: Folder restriction.
        query: Search text; blank means no search.
        known_folders: Current folder registry names, used to treat
            references to removed folders as uncategorized.

    Returns:
        Matching documents, newest first.
    """
    known = set(known_folders)
    return [
        doc
        for doc in sort_documents(documents)
        if folder_filter.matches(doc, known) and matches_search(doc, query)
    ]
