"""
MDB_DRIVER - MongoDB helper layer

Connection setup, idempotent index management and filtered/sorted/paginated
list queries on top of pymongo.
"""

from .config import MongoDriverOptions
from .core import IndexOption, ListOption, MongoDriver, SortDirection
from .database import build_find_options, list_documents
from .exceptions import (
    ConfigurationError,
    DriverConnectionError,
    IndexCreateError,
    IndexDropError,
    IndexOperationError,
    IndexQueryError,
    MongoDriverError,
    QueryDecodeError,
    QueryError,
)
from .indexes import (
    IndexManager,
    create_index,
    generate_index_name,
    has_index,
    list_indexes,
    remove_index,
    remove_index_by_option,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "MongoDriver",
    "MongoDriverOptions",
    "IndexOption",
    "ListOption",
    "SortDirection",
    # Indexes
    "IndexManager",
    "create_index",
    "generate_index_name",
    "has_index",
    "list_indexes",
    "remove_index",
    "remove_index_by_option",
    # Queries
    "build_find_options",
    "list_documents",
    # Errors
    "MongoDriverError",
    "ConfigurationError",
    "DriverConnectionError",
    "IndexOperationError",
    "IndexQueryError",
    "IndexCreateError",
    "IndexDropError",
    "QueryError",
    "QueryDecodeError",
]
