"""
Helper functions for index management.
"""

from typing import Any, Iterable, List

from ..constants import INDEX_NAME_PREFIX, INDEX_NAME_SEPARATOR
from ..core.types import IndexOption
from ..exceptions import ConfigurationError
from ..observability import get_logger

logger = get_logger(__name__)


def derive_index_name(fields: Iterable[str]) -> str:
    """
    Canonical index name for a set of fields.

    Fields are sorted, so the order they were supplied in never matters:
    ``{"b": 1, "a": -1}`` and ``{"a": -1, "b": 1}`` both give ``idx_a_b``.
    """
    return INDEX_NAME_PREFIX + INDEX_NAME_SEPARATOR.join(sorted(fields))


def generate_index_name(option: IndexOption) -> str:
    """
    Fill in ``option.name`` from its keys when it is empty.

    Args:
        option: Index option, updated in place

    Returns:
        The explicit or derived name

    Raises:
        ConfigurationError: If the option has neither a name nor keys
    """
    if not option.name:
        if not option.keys:
            raise ConfigurationError(
                "Index option needs a name or at least one key", config_key="keys"
            )
        option.name = derive_index_name(option.keys)
        logger.debug(f"Derived index name '{option.name}' from keys {list(option.keys)}")
    return option.name


def index_names(indexes: Iterable[dict[str, Any]]) -> List[str]:
    """Names from a list of index descriptors, skipping descriptors without one."""
    return [idx.get("name") for idx in indexes if idx.get("name")]
