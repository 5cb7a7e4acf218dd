"""
Core MDB_DRIVER components.

Exports the connection handle and the option types shared by the index
manager and the query executor.
"""

from .connection import MongoDriver
from .types import IndexOption, ListOption, SortDirection

__all__ = [
    "MongoDriver",
    "IndexOption",
    "ListOption",
    "SortDirection",
]
