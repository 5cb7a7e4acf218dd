"""
Configuration management for MDB_DRIVER.

Connection settings are an immutable Pydantic model. They can be passed
directly or read from the environment with ``MongoDriverOptions.from_env()``.
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    DEFAULT_PORT,
    DEFAULT_SCHEME,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
)
from .exceptions import ConfigurationError


class MongoDriverOptions(BaseModel):
    """
    MongoDB connection configuration.

    Example:
        # Using environment variables
        options = MongoDriverOptions.from_env()

        # Or using direct parameters
        options = MongoDriverOptions(
            database="app",
            host="localhost",
            port=27017,
            username="app",
            password="secret",
        )
    """

    model_config = ConfigDict(frozen=True)

    database: str = Field(..., min_length=1, description="Database name")
    host: str = Field(..., min_length=1, description="MongoDB host")
    port: int = Field(DEFAULT_PORT, ge=1, le=65535, description="MongoDB port")
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")
    scheme: str = Field(DEFAULT_SCHEME, min_length=1, description="URI scheme")
    server_selection_timeout_ms: int = Field(
        DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
        ge=1,
        description="Server selection timeout in milliseconds",
    )

    def build_uri(self) -> str:
        """
        Build the connection string.

        Credentials are interpolated as-is. Reserved URI characters in the
        username or password are not escaped and will produce a malformed URI.
        """
        return f"{self.scheme}://{self.username}:{self.password}@{self.host}:{self.port}"

    def redacted_uri(self) -> str:
        """Connection string with the password masked, for logging."""
        return f"{self.scheme}://{self.username}:***@{self.host}:{self.port}"

    @classmethod
    def from_env(cls, prefix: str = "MONGO_") -> "MongoDriverOptions":
        """
        Load options from environment variables.

        Reads ``{prefix}DATABASE``, ``{prefix}HOST``, ``{prefix}PORT``,
        ``{prefix}USERNAME``, ``{prefix}PASSWORD``, ``{prefix}SCHEME`` and
        ``{prefix}SERVER_SELECTION_TIMEOUT_MS``.

        Raises:
            ConfigurationError: If a variable is missing or invalid
        """
        port = _env_int(f"{prefix}PORT", DEFAULT_PORT)
        timeout = _env_int(
            f"{prefix}SERVER_SELECTION_TIMEOUT_MS", DEFAULT_SERVER_SELECTION_TIMEOUT_MS
        )
        try:
            return cls(
                database=os.getenv(f"{prefix}DATABASE", ""),
                host=os.getenv(f"{prefix}HOST", ""),
                port=port,
                username=os.getenv(f"{prefix}USERNAME", ""),
                password=os.getenv(f"{prefix}PASSWORD", ""),
                scheme=os.getenv(f"{prefix}SCHEME", DEFAULT_SCHEME),
                server_selection_timeout_ms=timeout,
            )
        except ValidationError as e:
            first = e.errors()[0]
            field_name = str(first["loc"][0]) if first.get("loc") else None
            config_key = f"{prefix}{field_name.upper()}" if field_name else None
            raise ConfigurationError(
                f"Invalid MongoDB configuration: {first['msg']}",
                config_key=config_key,
            ) from e


def _env_int(key: str, default: int) -> int:
    raw: Optional[str] = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{key} must be an integer", config_key=key, config_value=raw
        ) from e
