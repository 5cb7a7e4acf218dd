"""
Contextual logging for MDB_DRIVER.

Every record emitted through ``get_logger`` carries the fields of the
innermost ``operation_scope`` (``operation``, ``collection_name`` and
whatever else the scope was opened with) plus the caller's correlation ID,
if one was set. The package never installs handlers; configure logging in
the application.
"""

import contextvars
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mdb_driver_correlation_id", default=None
)

_scope_fields: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "mdb_driver_scope_fields", default={}
)


def get_correlation_id() -> str | None:
    """Correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Tag every following log record in this context with ``correlation_id``.

    Args:
        correlation_id: ID to use; a random UUID when omitted

    Returns:
        The ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Stop tagging records in this context with a correlation ID."""
    _correlation_id.set(None)


@contextmanager
def operation_scope(operation: str, **fields: Any) -> Iterator[dict[str, Any]]:
    """
    Attach ``operation`` and ``fields`` to log records inside the block.

    Scopes nest: an inner scope inherits the outer fields and overrides
    the ones it names. The outer fields are restored on exit.

    Example:
        with operation_scope("indexes.create", collection_name="users"):
            logger.info("creating")  # record.operation == "indexes.create"
    """
    scope = {**_scope_fields.get(), **fields, "operation": operation}
    token = _scope_fields.set(scope)
    try:
        yield scope
    finally:
        _scope_fields.reset(token)


def current_log_fields() -> dict[str, Any]:
    """Fields ``get_logger`` adds to records emitted right now."""
    fields = dict(_scope_fields.get())
    correlation_id = _correlation_id.get()
    if correlation_id:
        fields["correlation_id"] = correlation_id
    return fields


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that merges the active scope into ``extra``.

    Explicit ``extra`` keys win over scope fields.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**current_log_fields(), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a logger whose records carry the active operation scope.

    Args:
        name: Logger name (typically __name__)
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})
