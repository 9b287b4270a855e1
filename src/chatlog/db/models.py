"""Database models for chatlog.

Documents are stored one row per imported transcript. The table is created
and upgraded by chatlog.db.migrations, never by ``create_all``; the indices
declared here mirror what the latest migration leaves behind.
"""

from typing import Any, ClassVar

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from chatlog.core.models import Document


class LibraryBase(DeclarativeBase):
    """Base class for document store models."""

    type_annotation_map: ClassVar[dict[type, Any]] = {}


class DocumentRow(LibraryBase):
    """A stored transcript."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    added_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch ms
    # Added in schema v2; rows written under v1 read back as NULL
    folder: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_documents_name", "name"),
        Index("idx_documents_added_at", "added_at"),
        Index("idx_documents_folder", "folder"),
    )

    def to_document(self) -> Document:
        """Convert to a Document, filling defaults for fields older rows lack."""
        return Document(
            id=self.id,
            name=self.name,
            content=self.content,
            added_at=int(self.added_at),
            folder=self.folder or "",
        )

    @classmethod
    def from_document(cls, doc: Document) -> "DocumentRow":
        return cls(
            id=doc.id,
            name=doc.name,
            content=doc.content,
            added_at=doc.added_at,
            folder=doc.folder,
        )
