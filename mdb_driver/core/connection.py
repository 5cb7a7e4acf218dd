"""
Connection management for MDB_DRIVER.

``MongoDriver`` owns one ``pymongo.MongoClient`` and the database handle the
index manager and query executor work against. It is created once with
``MongoDriver.connect`` and passed by reference; there is no process-wide
singleton.

This module is part of MDB_DRIVER.
"""

import time
from types import TracebackType
from typing import Optional, Type

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..config import MongoDriverOptions
from ..constants import DEFAULT_APP_NAME
from ..exceptions import DriverConnectionError
from ..observability import get_logger, operation_scope, record_operation

logger = get_logger(__name__)


class MongoDriver:
    """
    Live MongoDB connection scoped to one database.

    Example:
        with MongoDriver.connect(options) as driver:
            users = driver.get_collection("users")
    """

    def __init__(self, client: MongoClient, db_name: str) -> None:
        """
        Wrap an already connected client.

        Prefer ``MongoDriver.connect``, which also verifies liveness.

        Args:
            client: Connected MongoClient
            db_name: Database name
        """
        self._client: Optional[MongoClient] = client
        self._db: Optional[Database] = client[db_name]
        self.db_name = db_name

    @classmethod
    def connect(cls, options: MongoDriverOptions) -> "MongoDriver":
        """
        Open a connection and verify it with a ping.

        Args:
            options: Connection configuration

        Returns:
            A connected MongoDriver

        Raises:
            DriverConnectionError: If the client cannot be created or the
                ping fails. No handle is returned in that case.
        """
        with operation_scope("connection.connect", db_name=options.database):
            start_time = time.time()
            logger.info("Connecting to MongoDB", extra={"mongo_uri": options.redacted_uri()})

            client: Optional[MongoClient] = None
            try:
                client = MongoClient(
                    options.build_uri(),
                    serverSelectionTimeoutMS=options.server_selection_timeout_ms,
                    appname=DEFAULT_APP_NAME,
                )
                client.admin.command("ping")
            except PyMongoError as e:
                duration_ms = (time.time() - start_time) * 1000
                record_operation("connection.connect", duration_ms, success=False)
                logger.error(
                    "MongoDB connection failed",
                    extra={
                        "error_type": type(e).__name__,
                        "error": str(e),
                        "duration_ms": round(duration_ms, 2),
                    },
                    exc_info=True,
                )
                if client is not None:
                    client.close()
                raise DriverConnectionError(
                    f"Failed to connect to MongoDB: {e}",
                    host=options.host,
                    port=options.port,
                    db_name=options.database,
                    context={"error_type": type(e).__name__},
                ) from e

            duration_ms = (time.time() - start_time) * 1000
            record_operation("connection.connect", duration_ms, success=True)
            logger.info(
                "MongoDB connection established",
                extra={"duration_ms": round(duration_ms, 2)},
            )
        return cls(client, options.database)

    def ping(self) -> None:
        """
        Probe the server.

        Raises:
            DriverConnectionError: If the ping fails
        """
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}", exc_info=True)
            raise DriverConnectionError(
                f"MongoDB ping failed: {e}",
                db_name=self.db_name,
                context={"error_type": type(e).__name__},
            ) from e

    def get_collection(self, name: str) -> Collection:
        """
        Return a handle to ``name`` in the active database.

        Never contacts the server; collections are created on first write.
        """
        return self.database[name]

    def close(self) -> None:
        """
        Close the client and release its resources.

        Safe to call more than once.
        """
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._db = None
        logger.info("MongoDB connection closed.")

    @property
    def closed(self) -> bool:
        """Whether ``close`` has been called."""
        return self._client is None

    @property
    def client(self) -> MongoClient:
        """
        Get the MongoDB client.

        Raises:
            RuntimeError: If the driver was closed
        """
        if self._client is None:
            raise RuntimeError("MongoDriver is closed.")
        return self._client

    @property
    def database(self) -> Database:
        """
        Get the MongoDB database.

        Raises:
            RuntimeError: If the driver was closed
        """
        if self._db is None:
            raise RuntimeError("MongoDriver is closed.")
        return self._db

    def __enter__(self) -> "MongoDriver":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"MongoDriver(db_name={self.db_name!r}, {state})"
