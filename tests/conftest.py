"""
Pytest configuration and shared fixtures for MDB_DRIVER tests.

This module provides:
- An in-memory stand-in for a pymongo collection
- Mock MongoDB client fixtures
- Testcontainers fixtures for integration tests
"""

import os
from typing import Any, Dict, Iterator, List, Optional
from unittest.mock import MagicMock

import pytest
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import OperationFailure

from mdb_driver.config import MongoDriverOptions
from mdb_driver.core.connection import MongoDriver
from mdb_driver.observability import get_metrics_collector


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: needs a real MongoDB (Docker)")


# ============================================================================
# IN-MEMORY COLLECTION
# ============================================================================


class FakeCollection:
    """
    Minimal in-memory collection covering the calls this package makes:
    ``list_indexes``, ``create_index``, ``drop_index`` and ``find``.
    """

    def __init__(self, name: str = "users", documents: Optional[List[Dict[str, Any]]] = None):
        self.name = name
        self.documents = list(documents or [])
        self.indexes: Dict[str, Dict[str, Any]] = {
            "_id_": {"v": 2, "key": {"_id": 1}, "name": "_id_"}
        }
        self.create_calls: List[Dict[str, Any]] = []
        self.find_calls: List[Dict[str, Any]] = []

    def list_indexes(self) -> Iterator[Dict[str, Any]]:
        return iter([dict(idx) for idx in self.indexes.values()])

    def create_index(self, keys, name: str, unique: bool = False) -> str:
        self.create_calls.append({"keys": list(keys), "name": name, "unique": unique})
        index = {"v": 2, "key": dict(keys), "name": name}
        if unique:
            index["unique"] = True
        self.indexes[name] = index
        return name

    def drop_index(self, name: str) -> None:
        if name not in self.indexes:
            raise OperationFailure(f"index not found with name [{name}]", code=27)
        del self.indexes[name]

    def find(self, filter=None, sort=None, skip: int = 0, limit: int = 0):
        self.find_calls.append({"filter": filter, "sort": sort, "skip": skip, "limit": limit})
        docs = [
            d for d in self.documents if all(d.get(k) == v for k, v in (filter or {}).items())
        ]
        for field, direction in reversed(sort or []):
            docs.sort(key=lambda d: d.get(field), reverse=direction < 0)
        if skip:
            docs = docs[skip:]
        if limit:
            docs = docs[:limit]
        return iter(docs)


@pytest.fixture
def make_collection():
    """Factory for in-memory collections with seed documents."""
    return FakeCollection


@pytest.fixture
def fake_collection() -> FakeCollection:
    """Empty in-memory collection named ``users``."""
    return FakeCollection()


@pytest.fixture
def mock_collection() -> MagicMock:
    """Create a mock pymongo collection."""
    collection = MagicMock(spec=Collection)
    collection.name = "users"
    collection.list_indexes.side_effect = lambda: iter(
        [{"v": 2, "key": {"_id": 1}, "name": "_id_"}]
    )
    collection.create_index.return_value = "test_index"
    return collection


@pytest.fixture
def offline_collection() -> Iterator[Collection]:
    """
    Real pymongo collection on a client that never reaches a server.

    Useful for errors pymongo raises client-side before any network I/O.
    """
    client = MongoClient("mongodb://127.0.0.1:1", connect=False, serverSelectionTimeoutMS=100)
    yield client["test_db"]["accounts"]
    client.close()


@pytest.fixture
def driver_options() -> MongoDriverOptions:
    return MongoDriverOptions(
        database="test_db",
        host="localhost",
        port=27017,
        username="app",
        password="secret",
    )


@pytest.fixture
def mock_mongo_client() -> MagicMock:
    """Create a mock MongoDB client that answers pings."""
    client = MagicMock(spec=MongoClient)
    client.admin = MagicMock()
    client.admin.command = MagicMock(return_value={"ok": 1})
    return client


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with an empty global metrics collector."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


# ============================================================================
# TESTCONTAINERS FIXTURES (Real MongoDB for Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def mongodb_container():
    """
    Start a MongoDB container for integration tests.

    Session-scoped: the container starts once and is reused.
    """
    try:
        from testcontainers.mongodb import MongoDbContainer
    except ImportError:
        pytest.skip("testcontainers not installed. Install with: pip install -e '.[test]'")

    container = MongoDbContainer("mongo:7.0")
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"Could not start MongoDB container (is Docker running?): {e}")
    yield container
    container.stop()


@pytest.fixture
def real_driver_options(mongodb_container) -> MongoDriverOptions:
    """Options pointing at the test container, with a per-process database."""
    return MongoDriverOptions(
        database=f"test_db_{os.getpid()}",
        host=mongodb_container.get_container_host_ip(),
        port=int(mongodb_container.get_exposed_port(27017)),
        username=mongodb_container.username,
        password=mongodb_container.password,
    )


@pytest.fixture
def real_driver(real_driver_options) -> Iterator[MongoDriver]:
    """
    Connected MongoDriver. Drops the test database and closes the client
    after the test.
    """
    driver = MongoDriver.connect(real_driver_options)
    yield driver
    driver.client.drop_database(driver.db_name)
    driver.close()


@pytest.fixture
def real_collection(real_driver) -> Collection:
    return real_driver.get_collection("users")
