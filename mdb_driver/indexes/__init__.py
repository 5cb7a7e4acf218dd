"""
Index Management Module

Provides idempotent creation and removal of regular MongoDB indexes.

This module is part of MDB_DRIVER.
"""

from .helpers import derive_index_name, generate_index_name, index_names
from .manager import (
    IndexManager,
    create_index,
    has_index,
    list_indexes,
    remove_index,
    remove_index_by_option,
)

__all__ = [
    "IndexManager",
    "create_index",
    "derive_index_name",
    "generate_index_name",
    "has_index",
    "index_names",
    "list_indexes",
    "remove_index",
    "remove_index_by_option",
]
