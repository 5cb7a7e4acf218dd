"""
List queries.

Turns a ``ListOption`` into a single ``find`` and drains every matching
document into a caller-supplied container. There is no default cap on the
result size; unbounded filters load the whole collection.

This module is part of MDB_DRIVER.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from bson.errors import BSONError, InvalidBSON, InvalidDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..core.types import ListOption
from ..exceptions import QueryDecodeError, QueryError
from ..observability import get_logger, tracked_operation

logger = get_logger(__name__)

T = TypeVar("T")

DocumentClass = Callable[[Mapping[str, Any]], T]

# pymongo rejects a malformed filter, sort, skip or limit with TypeError,
# ValueError or InvalidDocument before anything is sent.
_REQUEST_ERRORS = (PyMongoError, InvalidDocument, TypeError, ValueError)

# Raised by dataclass constructors and pydantic's model_validate on bad input.
_DECODE_ERRORS = (TypeError, ValueError, KeyError, AttributeError, BSONError)


def build_find_options(option: ListOption) -> Dict[str, Any]:
    """
    Keyword arguments for ``Collection.find``.

    ``sort`` is included whenever it is non-empty, in the given order.
    ``skip`` and ``limit`` are included only when both are greater than zero;
    one without the other is ignored.
    """
    find_options: Dict[str, Any] = {}
    if option.paginated:
        find_options["skip"] = option.skip
        find_options["limit"] = option.limit
    if option.sort:
        find_options["sort"] = [(field, int(direction)) for field, direction in option.sort]
    return find_options


def list_documents(
    collection: Collection,
    option: ListOption,
    results: Optional[List[Any]] = None,
    document_class: Optional[DocumentClass] = None,
) -> List[Any]:
    """
    Run ``option`` against ``collection`` and collect every match.

    Args:
        collection: Collection to query
        option: Filter, sort and pagination
        results: List to extend in place (a new list when omitted)
        document_class: Optional callable turning each raw document into
            the caller's type, e.g. a dataclass or ``Model.model_validate``

    Returns:
        ``results`` with the matching documents appended

    Raises:
        QueryError: If the find request is rejected or cursor iteration
            fails
        QueryDecodeError: If a document cannot be read or converted;
            documents converted before it remain in ``results``
    """
    if results is None:
        results = []

    with tracked_operation("query.list", collection.name):
        try:
            cursor = collection.find(option.filter, **build_find_options(option))
        except _REQUEST_ERRORS as e:
            raise _query_error(collection, e) from e

        decoded = 0
        try:
            for document in cursor:
                results.append(_decode(collection, document, decoded, document_class))
                decoded += 1
        except (PyMongoError, InvalidDocument) as e:
            raise _query_error(collection, e) from e
        except InvalidBSON as e:
            raise _decode_error(collection, decoded, e) from e

    return results


def _decode(
    collection: Collection,
    document: Mapping[str, Any],
    index: int,
    document_class: Optional[DocumentClass],
) -> Any:
    if document_class is None:
        return document
    try:
        return document_class(document)
    except _DECODE_ERRORS as e:
        raise _decode_error(collection, index, e) from e


def _query_error(collection: Collection, e: Exception) -> QueryError:
    logger.error(f"Find on '{collection.name}' failed: {e}", exc_info=True)
    return QueryError(
        f"Find on '{collection.name}' failed: {e}",
        context={"collection_name": collection.name, "error_type": type(e).__name__},
    )


def _decode_error(collection: Collection, index: int, e: Exception) -> QueryDecodeError:
    logger.error(
        f"Could not decode document {index} from '{collection.name}': {e}",
        extra={"document_index": index},
        exc_info=True,
    )
    return QueryDecodeError(
        f"Could not decode document {index}: {e}",
        document_index=index,
        context={"collection_name": collection.name, "error_type": type(e).__name__},
    )
