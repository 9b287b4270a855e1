"""Database models, engine and schema migrations for chatlog."""

from chatlog.db.engine import create_library_engine, create_session_factory, init_database
from chatlog.db.migrations import MIGRATIONS, SCHEMA_VERSION, migrate, pending_steps
from chatlog.db.models import DocumentRow, LibraryBase

__all__ = [
    "DocumentRow",
    "LibraryBase",
    "MIGRATIONS",
    "SCHEMA_VERSION",
    "create_library_engine",
    "create_session_factory",
    "init_database",
    "migrate",
    "pending_steps",
]
