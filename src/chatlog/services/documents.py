"""Document record CRUD (versioned SQLite store)."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from chatlog.core.errors import RecordIOError, StoreUnavailable
from chatlog.core.models import Document
from chatlog.db.engine import create_library_engine, create_session_factory, init_database
from chatlog.db.models import DocumentRow

logger = logging.getLogger(__name__)


class DocumentStore:
    """Async store for Document records, keyed by id.

    Each operation runs in its own transaction and is atomic for the one
    record it touches. There is no multi-record transaction.

    Open with ``await DocumentStore.open(path)``; opening runs any pending
    schema migration.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._sessions: async_sessionmaker[AsyncSession] = create_session_factory(engine)

    @classmethod
    async def open(cls, db_path: Path) -> DocumentStore:
        """Open the store at ``db_path``, creating or upgrading its schema.

        Raises:
            StoreUnavailable: If the database cannot be opened or migrated.
        """
        try:
            engine = create_library_engine(db_path)
        except OSError as e:
            raise StoreUnavailable(f"Cannot open document store at {db_path}: {e}") from e

        try:
            await init_database(engine)
        except (SQLAlchemyError, ValueError) as e:
            await engine.dispose()
            raise StoreUnavailable(f"Cannot open document store at {db_path}: {e}") from e

        logger.debug("Opened document store at %s", db_path)
        return cls(engine)

    async def close(self) -> None:
        """Release the underlying connections."""
        await self._engine.dispose()

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    async def get_all(self) -> list[Document]:
        """Return every stored document, in no particular order."""
        try:
            async with self._sessions() as session:
                rows = await session.scalars(select(DocumentRow))
                return [row.to_document() for row in rows]
        except SQLAlchemyError as e:
            raise RecordIOError(f"Failed to read documents: {e}") from e

    async def get(self, document_id: str) -> Document | None:
        """Get a document by id.

        Returns:
            Document or None if not found.
        """
        try:
            async with self._sessions() as session:
                row = await session.get(DocumentRow, document_id)
                return row.to_document() if row is not None else None
        except SQLAlchemyError as e:
            raise RecordIOError(f"Failed to read document {document_id}: {e}") from e

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    async def put(self, doc: Document) -> None:
        """Insert or replace a document. The whole record is overwritten."""
        try:
            async with self._sessions.begin() as session:
                await session.merge(DocumentRow.from_document(doc))
        except SQLAlchemyError as e:
            raise RecordIOError(f"Failed to write document {doc.id}: {e}") from e

    async def delete(self, document_id: str) -> bool:
        """Delete a document. Missing ids are not an error.

        Returns:
            True if a document existed and was deleted.
        """
        try:
            async with self._sessions.begin() as session:
                result = await session.execute(
                    delete(DocumentRow).where(DocumentRow.id == document_id)
                )
                return bool(result.rowcount)
        except SQLAlchemyError as e:
            raise RecordIOError(f"Failed to delete document {document_id}: {e}") from e
