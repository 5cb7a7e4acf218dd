"""
Option types shared by the index manager and the query executor.

This module is part of MDB_DRIVER.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pymongo


class SortDirection(IntEnum):
    """Index and sort direction, interchangeable with pymongo's constants."""

    ASCENDING = pymongo.ASCENDING
    DESCENDING = pymongo.DESCENDING


Direction = Union[SortDirection, int]
SortSpec = Sequence[Tuple[str, Direction]]


@dataclass
class IndexOption:
    """
    Description of one regular index.

    ``name`` may be left empty; it is then derived from the key fields
    (see ``mdb_driver.indexes.helpers.generate_index_name``) and written
    back onto the option.

    Example:
        IndexOption(keys={"email": SortDirection.ASCENDING}, unique=True)
    """

    keys: Dict[str, Direction] = field(default_factory=dict)
    name: str = ""
    unique: bool = False

    def key_list(self) -> List[Tuple[str, int]]:
        """Keys as the ordered (field, direction) pairs pymongo expects."""
        return [(k, int(v)) for k, v in self.keys.items()]


@dataclass
class ListOption:
    """
    Filter, sort and pagination for ``list_documents``.

    ``skip`` and ``limit`` only take effect when both are greater than zero.
    ``sort`` is applied in the given order. A ``None`` filter matches every
    document, like an empty one.
    """

    filter: Optional[Mapping[str, Any]] = field(default_factory=dict)
    sort: SortSpec = field(default_factory=list)
    limit: int = 0
    skip: int = 0

    @property
    def paginated(self) -> bool:
        """Whether both ``limit`` and ``skip`` are positive, so both apply."""
        return self.limit > 0 and self.skip > 0
