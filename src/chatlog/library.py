"""Library — the application state threaded through every user action.

Owns the open document store, the folder registry and the preferences,
plus the cached document list and the current catalog filter. Every
mutating operation awaits the store and refreshes the cache before
returning, so ``visible()`` never reads stale state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from chatlog.config import Settings
from chatlog.core.errors import DocumentNotFound, StoreUnavailable, UnknownFolder
from chatlog.core.models import Document, DocumentSummary, OpenedDocument
from chatlog.services.catalog import FolderFilter, sort_documents, view
from chatlog.services.documents import DocumentStore
from chatlog.services.folders import FolderRegistry
from chatlog.services.importer import new_document, read_transcript
from chatlog.services.preferences import Preferences
from chatlog.transcript.parser import parse_conversation, question_preview

logger = logging.getLogger(__name__)


class Library:
    """Explicit application context for the document catalog."""

    def __init__(
        self,
        store: DocumentStore,
        registry: FolderRegistry,
        prefs: Preferences,
        preview_chars: int = 50,
    ):
        self.store = store
        self.registry = registry
        self.prefs = prefs
        self.preview_chars = preview_chars
        self.documents: list[Document] = []
        self.folders: list[str] = []
        self.folder_filter = FolderFilter.all()
        self.query = ""
        self.current_document_id: str | None = None

    @classmethod
    async def open(cls, settings: Settings) -> Library:
        """Open the store (migrating if needed), load folders, fill the cache.

        Raises:
            StoreUnavailable: If the store or preferences cannot be opened.
        """
        try:
            settings.ensure_storage_dir()
        except OSError as e:
            raise StoreUnavailable(f"Cannot create storage at {settings.storage_dir}: {e}") from e
        store = await DocumentStore.open(settings.db_path)
        try:
            prefs = Preferences.load(settings.prefs_path)
            library = cls(
                store,
                FolderRegistry(prefs, store),
                prefs,
                preview_chars=settings.preview_chars,
            )
            await library.refresh()
        except BaseException:
            await store.close()
            raise
        return library

    async def close(self) -> None:
        await self.store.close()

    async def __aenter__(self) -> Library:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    async def refresh(self) -> None:
        """Reload documents and folders from persisted state."""
        self.documents = sort_documents(await self.store.get_all())
        self.folders = await self.registry.list()

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    def visible(self) -> list[Document]:
        """Documents matching the current folder filter and search query."""
        return view(self.documents, self.folder_filter, self.query, self.folders)

    def set_folder_filter(self, folder_filter: FolderFilter) -> list[Document]:
        self.folder_filter = folder_filter
        return self.visible()

    def set_search(self, query: str) -> list[Document]:
        self.query = query
        return self.visible()

    def summarize(self, doc: Document) -> DocumentSummary:
        exchanges = parse_conversation(doc.content)
        return DocumentSummary(
            document=doc,
            exchange_count=len(exchanges),
            preview=question_preview(exchanges, self.preview_chars),
        )

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    async def import_text(self, filename: str, content: str) -> Document:
        """Store text as a new document."""
        doc = new_document(filename, content)
        await self.store.put(doc)
        logger.info("Imported %s as %s", filename, doc.id)
        await self.refresh()
        return doc

    async def import_files(self, paths: Iterable[Path]) -> list[Document]:
        """Import files one after another, in the order given."""
        imported = []
        try:
            for path in paths:
                content = read_transcript(path)
                doc = new_document(path.name, content)
                await self.store.put(doc)
                logger.info("Imported %s as %s", path, doc.id)
                imported.append(doc)
        finally:
            # Files stored before a failure stay imported
            await self.refresh()
        return imported

    async def delete_document(self, document_id: str) -> bool:
        """Delete a document and its saved view state.

        Returns:
            True if the document existed.
        """
        existed = await self.store.delete(document_id)
        if self.current_document_id == document_id:
            self.current_document_id = None
        if existed:
            logger.info("Deleted document %s", document_id)
        try:
            self.prefs.clear_scroll_offset(document_id)
        finally:
            await self.refresh()
        return existed

    async def assign_folder(self, document_id: str, folder: str) -> Document:
        """Move a document into ``folder``; an empty name clears it.

        Raises:
            DocumentNotFound: If no such document exists.
            UnknownFolder: If ``folder`` is not in the registry.
        """
        if folder and folder not in self.registry:
            raise UnknownFolder(folder)
        doc = await self.store.get(document_id)
        if doc is None:
            raise DocumentNotFound(document_id)
        updated = doc.with_folder(folder)
        await self.store.put(updated)
        await self.refresh()
        return updated

    async def open_document(self, document_id: str) -> OpenedDocument:
        """Load a document and parse its exchanges.

        Raises:
            DocumentNotFound: If the document was deleted or never existed.
        """
        doc = await self.store.get(document_id)
        if doc is None:
            raise DocumentNotFound(document_id)
        self.current_document_id = doc.id
        return OpenedDocument(
            document=doc,
            exchanges=parse_conversation(doc.content),
            scroll_offset=self.prefs.get_scroll_offset(doc.id),
        )

    def close_document(self, scroll_offset: int | None = None) -> None:
        """Leave the open document, remembering where the reader was."""
        if self.current_document_id is None:
            return
        document_id, self.current_document_id = self.current_document_id, None
        if scroll_offset is not None:
            self.prefs.set_scroll_offset(document_id, scroll_offset)

    # -------------------------------------------------------------------------
    # Folders
    # -------------------------------------------------------------------------

    async def add_folder(self, name: str) -> bool:
        added = await self.registry.add(name)
        await self.refresh()
        return added

    async def remove_folder(self, name: str) -> int:
        """Remove a folder, unassigning its documents.

        Returns:
            Number of documents unassigned.
        """
        try:
            cleared = await self.registry.remove(name)
        finally:
            if name not in self.registry and self.folder_filter == FolderFilter.named(name):
                self.folder_filter = FolderFilter.all()
            await self.refresh()
        return cleared
