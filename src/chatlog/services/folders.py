"""Folder registry: ordered, user-defined folder names."""

from __future__ import annotations

import logging

from chatlog.core.errors import RecordIOError
from chatlog.services.documents import DocumentStore
from chatlog.services.preferences import FOLDERS_KEY, Preferences

logger = logging.getLogger(__name__)


class FolderRegistry:
    """Ordered set of folder names persisted as one preferences value.

    Names are unique (exact, case-sensitive) and non-empty. Order is
    insertion order.
    """

    def __init__(self, prefs: Preferences, store: DocumentStore):
        self._prefs = prefs
        self._store = store
        stored = prefs.get(FOLDERS_KEY) or []
        if not isinstance(stored, list):
            logger.warning("Ignoring malformed folder list in %s", prefs.path)
            stored = []
        # First occurrence wins for hand-edited duplicates
        self._names: list[str] = list(dict.fromkeys(n for n in stored if isinstance(n, str) and n))

    async def list(self) -> list[str]:
        """Folder names in insertion order."""
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    async def add(self, name: str) -> bool:
        """Add a folder.

        Returns:
            False (and changes nothing) if the trimmed name is empty or
            already present, True otherwise.

        Raises:
            RecordIOError: If the registry cannot be saved; nothing changes.
        """
        name = name.strip()
        if not name or name in self._names:
            return False
        self._persist([*self._names, name])
        logger.info("Added folder %r", name)
        return True

    async def remove(self, name: str) -> int:
        """Remove a folder and unassign it from every document.

        The registry is updated first. Documents are then cleared one
        ``put`` at a time. A document that cannot be updated is logged and
        skipped; it keeps pointing at the removed name, which the catalog
        shows as uncategorized.

        Returns:
            Number of documents unassigned.

        Raises:
            RecordIOError: If the registry itself cannot be saved.
        """
        if not name:
            return 0
        if name in self._names:
            self._persist([n for n in self._names if n != name])
            logger.info("Removed folder %r", name)

        try:
            documents = await self._store.get_all()
        except RecordIOError as e:
            logger.warning("Could not scan documents for folder %r: %s", name, e)
            return 0

        cleared = 0
        for doc in documents:
            if doc.folder != name:
                continue
            try:
                await self._store.put(doc.with_folder(""))
            except RecordIOError as e:
                logger.warning("Could not unassign %s from folder %r: %s", doc.id, name, e)
                continue
            cleared += 1
        if cleared:
            logger.info("Unassigned %d document(s) from folder %r", cleared, name)
        return cleared

    def _persist(self, names: list[str]) -> None:
        self._prefs.set(FOLDERS_KEY, names)
        self._names = names
