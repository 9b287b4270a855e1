"""Service layer for chatlog.

- documents: Document record CRUD (SQLite)
- preferences: Auxiliary key/value state (JSON file)
- folders: Folder registry and unassignment cascade
- catalog: Folder and search filtering
- importer: File-to-document conversion
"""

from chatlog.services import catalog, documents, folders, importer, preferences

__all__ = [
    "catalog",
    "documents",
    "folders",
    "importer",
    "preferences",
]
