"""
Database query layer for MDB_DRIVER.

Filtered, sorted and paginated list queries over pymongo collections.
"""

from .query import build_find_options, list_documents

__all__ = [
    "build_find_options",
    "list_documents",
]
