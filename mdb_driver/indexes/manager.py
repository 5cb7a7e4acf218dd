"""
Index Management

Idempotent creation and removal of regular indexes, keyed by index name.

Existence is always read from the server; nothing is cached between calls.
An index whose name already exists is skipped without comparing its keys,
so reusing a name for different keys goes unnoticed.

Batches are not transactional: when one element fails, the elements before
it stay applied and the ones after it are not attempted.

This module is part of MDB_DRIVER.
"""

from typing import Any, List

import pymongo
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..constants import LIST_INDEXES_TIMEOUT_SECONDS
from ..core.types import IndexOption
from ..exceptions import IndexCreateError, IndexDropError, IndexQueryError
from ..observability import get_logger, tracked_operation
from .helpers import generate_index_name, index_names

logger = get_logger(__name__)

# pymongo rejects an empty or malformed key spec client-side with these.
_CREATE_ERRORS = (PyMongoError, TypeError, ValueError)


def list_indexes(collection: Collection) -> List[dict[str, Any]]:
    """
    Read the index descriptors of ``collection``.

    The read is bounded by ``LIST_INDEXES_TIMEOUT_SECONDS``.

    Raises:
        IndexQueryError: On timeout or any driver failure
    """
    try:
        with pymongo.timeout(LIST_INDEXES_TIMEOUT_SECONDS):
            return list(collection.list_indexes())
    except PyMongoError as e:
        logger.error(f"Failed to list indexes on '{collection.name}': {e}", exc_info=True)
        raise IndexQueryError(
            f"Failed to list indexes: {e}",
            collection_name=collection.name,
            context={"error_type": type(e).__name__},
        ) from e


def has_index(collection: Collection, name: str) -> bool:
    """
    Check whether an index called ``name`` exists on ``collection``.

    Raises:
        IndexQueryError: If the index metadata cannot be read
    """
    return name in index_names(list_indexes(collection))


def create_index(collection: Collection, *options: IndexOption) -> List[str]:
    """
    Create each index in ``options`` unless one with the same name exists.

    Options without a name get one derived from their keys (written back
    onto the option).

    Returns:
        Names of the indexes that were actually created

    Raises:
        IndexQueryError: If checking for an existing index fails
        IndexCreateError: On the first failed creation, including key specs
            pymongo rejects before contacting the server
    """
    created: List[str] = []
    for option in options:
        name = generate_index_name(option)
        if has_index(collection, name):
            logger.debug(
                f"Index '{name}' already exists on '{collection.name}'; skipping.",
                extra={"index_name": name},
            )
            continue

        with tracked_operation("indexes.create", collection.name):
            try:
                acknowledged = collection.create_index(
                    option.key_list(), name=name, unique=option.unique
                )
            except _CREATE_ERRORS as e:
                logger.error(
                    f"Failed to create index '{name}' on '{collection.name}': {e}",
                    extra={"index_name": name},
                    exc_info=True,
                )
                raise IndexCreateError(
                    f"Failed to create index '{name}': {e}",
                    collection_name=collection.name,
                    index_name=name,
                    context={"error_type": type(e).__name__, "created_before_failure": created},
                ) from e
            logger.info(
                f"Created index '{acknowledged}' on '{collection.name}'.",
                extra={"index_name": name, "unique": option.unique},
            )
        created.append(name)
    return created


def remove_index(collection: Collection, *names: str) -> None:
    """
    Drop each index in ``names``.

    Raises:
        IndexDropError: On the first failed drop
    """
    with tracked_operation("indexes.remove", collection.name):
        for name in names:
            try:
                collection.drop_index(name)
            except PyMongoError as e:
                logger.error(
                    f"Failed to drop index '{name}' on '{collection.name}': {e}",
                    extra={"index_name": name},
                    exc_info=True,
                )
                raise IndexDropError(
                    f"Failed to drop index '{name}': {e}",
                    collection_name=collection.name,
                    index_name=name,
                    context={"error_type": type(e).__name__},
                ) from e
            logger.info(
                f"Dropped index '{name}' on '{collection.name}'.", extra={"index_name": name}
            )

def remove_index_by_option(collection: Collection, *options: IndexOption) -> None:
    """
    Drop the indexes described by ``options``.

    Names are derived exactly as ``create_index`` derives them, so the
    option used to create an index can be reused to drop it.

    Raises:
        IndexDropError: On the first failed drop
    """
    names = [generate_index_name(option) for option in options]
    remove_index(collection, *names)


class IndexManager:
    """
    Index operations bound to one collection.

    Example:
        manager = IndexManager(driver.get_collection("users"))
        manager.create(IndexOption(keys={"email": 1}, unique=True))
        assert manager.exists("idx_email")
    """

    __slots__ = ("_collection",)

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @property
    def collection(self) -> Collection:
        """The collection every method operates on."""
        return self._collection

    def list(self) -> List[dict[str, Any]]:
        return list_indexes(self._collection)

    def exists(self, name: str) -> bool:
        return has_index(self._collection, name)

    def create(self, *options: IndexOption) -> List[str]:
        return create_index(self._collection, *options)

    def remove(self, *names: str) -> None:
        remove_index(self._collection, *names)

    def remove_by_option(self, *options: IndexOption) -> None:
        remove_index_by_option(self._collection, *options)
