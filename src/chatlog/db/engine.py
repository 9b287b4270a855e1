"""Database engine setup for chatlog.

The document database is a single SQLite file opened through the aiosqlite
driver. pysqlite's implicit transaction handling does not cover DDL, so
transactions are begun explicitly to keep each migration atomic.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from chatlog.db.migrations import migrate

logger = logging.getLogger(__name__)


def _disable_driver_transactions(dbapi_conn: object, connection_record: object) -> None:
    """Let SQLAlchemy, not the driver, decide when transactions begin."""
    dbapi_conn.isolation_level = None  # type: ignore[attr-defined]


def _begin_transaction(conn) -> None:
    conn.exec_driver_sql("BEGIN")


def create_library_engine(db_path: Path) -> AsyncEngine:
    """Create an async SQLite engine with proper configuration."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", _disable_driver_transactions)
    event.listen(engine.sync_engine, "begin", _begin_transaction)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(bind=engine, expire_on_commit=False)


async def init_database(engine: AsyncEngine) -> int:
    """Bring the schema up to date in one transaction.

    Returns:
        The schema version found before migrating.
    """
    async with engine.begin() as conn:
        previous = await conn.run_sync(migrate)
    logger.debug("Document database ready (was schema v%d)", previous)
    return previous
