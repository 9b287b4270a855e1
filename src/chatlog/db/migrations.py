"""Schema migrations for the document database.

The schema version lives in ``PRAGMA user_version``. Each entry in
MIGRATIONS upgrades the schema by exactly one version and touches schema
metadata only: existing rows are never rewritten.

History:
- v1: documents(id, name, content, added_at) with name/added_at indices
- v2: nullable ``folder`` column and its index
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import Connection, text

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

MigrationStep = Callable[[Connection], None]


def _create_documents(conn: Connection) -> None:
    conn.execute(
        text("""
        CREATE TABLE IF NOT EXISTS documents (
            id VARCHAR(64) NOT NULL PRIMARY KEY,
            name TEXT NOT NULL,
            content TEXT NOT NULL,
            added_at BIGINT NOT NULL
        )
    """)
    )
    conn.execute(text("CREATE INDEX IF NOT EXISTS idx_documents_name ON documents(name)"))
    conn.execute(
        text("CREATE INDEX IF NOT EXISTS idx_documents_added_at ON documents(added_at)")
    )


def _add_folder(conn: Connection) -> None:
    # No DEFAULT: SQLite records the column in the schema only, rows are untouched
    conn.execute(text("ALTER TABLE documents ADD COLUMN folder TEXT"))
    conn.execute(text("CREATE INDEX IF NOT EXISTS idx_documents_folder ON documents(folder)"))


MIGRATIONS: dict[tuple[int, int], MigrationStep] = {
    (0, 1): _create_documents,
    (1, 2): _add_folder,
}


def get_schema_version(conn: Connection) -> int:
    """Read the schema version recorded in the database."""
    return int(conn.exec_driver_sql("PRAGMA user_version").scalar() or 0)


def pending_steps(current: int, target: int = SCHEMA_VERSION) -> list[tuple[int, int]]:
    """Return the (from, to) steps needed to go from ``current`` to ``target``.

    Raises:
        ValueError: If ``current`` is newer than ``target`` or a step is missing.
    """
    if current > target:
        msg = f"Database schema v{current} is newer than supported v{target}"
        raise ValueError(msg)

    steps = []
    for version in range(current, target):
        step = (version, version + 1)
        if step not in MIGRATIONS:
            msg = f"No migration from v{version} to v{version + 1}"
            raise ValueError(msg)
        steps.append(step)
    return steps


def migrate(conn: Connection, target: int = SCHEMA_VERSION) -> int:
    """Run pending migrations on an open connection.

    The caller owns the transaction, so the steps and the version bump
    commit or roll back together.

    Returns:
        The schema version found before migrating.
    """
    current = get_schema_version(conn)
    steps = pending_steps(current, target)
    for step in steps:
        logger.info("Migrating document schema v%d -> v%d", *step)
        MIGRATIONS[step](conn)
    if steps:
        # PRAGMA does not take bound parameters; target is an int
        conn.exec_driver_sql(f"PRAGMA user_version = {int(target)}")
    return current
