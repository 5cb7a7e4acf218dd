"""
Unit tests for custom exceptions.

Tests exception hierarchy and error messages.
"""

import pytest

from mdb_driver.exceptions import (ConfigurationError, DriverConnectionError,
                                   IndexCreateError, IndexDropError,
                                   IndexOperationError, IndexQueryError,
                                   MongoDriverError, QueryDecodeError,
                                   QueryError)


class TestExceptionHierarchy:
    """Test exception inheritance hierarchy."""

    def test_mongo_driver_error_is_runtime_error(self):
        """Test that MongoDriverError is a RuntimeError."""
        error = MongoDriverError("test error")
        assert isinstance(error, RuntimeError)

    def test_connection_error_is_builtin_connection_error(self):
        """Test that DriverConnectionError is also a builtin ConnectionError."""
        error = DriverConnectionError("unreachable")
        assert isinstance(error, MongoDriverError)
        assert isinstance(error, ConnectionError)

    @pytest.mark.parametrize("cls", [IndexQueryError, IndexCreateError, IndexDropError])
    def test_index_errors_share_base(self, cls):
        """Test that index errors derive from IndexOperationError."""
        error = cls("index failure")
        assert isinstance(error, IndexOperationError)
        assert isinstance(error, MongoDriverError)

    def test_query_errors_are_distinct(self):
        """Test that decode failures are not reported as find failures."""
        assert not isinstance(QueryDecodeError("bad doc"), QueryError)
        assert isinstance(QueryDecodeError("bad doc"), MongoDriverError)
        assert isinstance(QueryError("find failed"), MongoDriverError)

    def test_configuration_error_inheritance(self):
        """Test that ConfigurationError inherits from MongoDriverError."""
        error = ConfigurationError("config invalid")
        assert isinstance(error, MongoDriverError)


class TestExceptionMessages:
    """Test exception message formatting."""

    def test_message_without_context(self):
        """Test MongoDriverError message."""
        error = MongoDriverError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}

    def test_message_with_context(self):
        """Test MongoDriverError message with context."""
        error = MongoDriverError("Something went wrong", context={"collection_name": "users"})
        assert "context:" in str(error)
        assert "collection_name=users" in str(error)

    def test_connection_error_context(self):
        """Test DriverConnectionError carries host, port and database."""
        error = DriverConnectionError(
            "Connection failed", host="db.internal", port=27017, db_name="app"
        )
        assert error.host == "db.internal"
        assert error.port == 27017
        assert error.db_name == "app"
        assert error.context["host"] == "db.internal"
        assert error.context["port"] == 27017

    def test_index_error_context(self):
        """Test index errors carry collection and index names."""
        error = IndexCreateError("failed", collection_name="users", index_name="idx_email")
        assert error.collection_name == "users"
        assert error.index_name == "idx_email"
        assert "index_name=idx_email" in str(error)

    def test_decode_error_index(self):
        """Test QueryDecodeError records the failing document position."""
        error = QueryDecodeError("bad", document_index=0)
        assert error.document_index == 0
        assert error.context["document_index"] == 0

    def test_configuration_error_with_key(self):
        """Test ConfigurationError with config key."""
        error = ConfigurationError("Invalid value", config_key="MONGO_PORT", config_value="x")
        assert error.config_key == "MONGO_PORT"
        assert error.config_value == "x"
        assert "config_key" in error.context


class TestExceptionChaining:
    """Test exception chaining."""

    def test_exception_chaining(self):
        """Test that the original error is preserved as the cause."""
        original_error = ValueError("Original error")
        try:
            try:
                raise original_error
            except ValueError as e:
                raise QueryError("Wrapped error") from e
        except QueryError as e:
            assert e.__cause__ is original_error
