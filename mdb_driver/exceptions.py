"""
Custom exceptions for MDB_DRIVER.

Every error raised by this package derives from MongoDriverError, which
keeps backward compatibility with RuntimeError. The underlying pymongo
exception is always chained as ``__cause__``.
"""

from typing import Any, Dict, Optional


class MongoDriverError(RuntimeError):
    """
    Base exception for MDB_DRIVER errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (collection_name,
                 index_name, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(MongoDriverError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value


class DriverConnectionError(MongoDriverError, ConnectionError):
    """
    Raised when connecting to MongoDB or the liveness ping fails.

    Also a builtin ``ConnectionError`` so generic network handlers catch it.

    Attributes:
        message: Error message
        host: Host that was dialed (if available)
        port: Port that was dialed (if available)
        db_name: Database name (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        db_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if host:
            context["host"] = host
        if port is not None:
            context["port"] = port
        if db_name:
            context["db_name"] = db_name
        super().__init__(message, context=context)
        self.host = host
        self.port = port
        self.db_name = db_name


class IndexOperationError(MongoDriverError):
    """
    Base class for index management failures.

    Attributes:
        collection_name: Collection the operation targeted (if available)
        index_name: Index the operation targeted (if available)
    """

    def __init__(
        self,
        message: str,
        collection_name: Optional[str] = None,
        index_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if collection_name:
            context["collection_name"] = collection_name
        if index_name:
            context["index_name"] = index_name
        super().__init__(message, context=context)
        self.collection_name = collection_name
        self.index_name = index_name


class IndexQueryError(IndexOperationError):
    """Raised when listing index metadata fails or times out."""


class IndexCreateError(IndexOperationError):
    """Raised when creating an index fails."""


class IndexDropError(IndexOperationError):
    """Raised when dropping an index fails."""


class QueryError(MongoDriverError):
    """Raised when a find request fails."""


class QueryDecodeError(MongoDriverError):
    """
    Raised when a matched document cannot be materialized into the
    caller's document type.

    Attributes:
        document_index: Position of the offending document in the result set
    """

    def __init__(
        self,
        message: str,
        document_index: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if document_index is not None:
            context["document_index"] = document_index
        super().__init__(message, context=context)
        self.document_index = document_index
