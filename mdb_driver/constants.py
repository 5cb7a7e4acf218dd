"""
Constants for MDB_DRIVER.

This module contains all shared constants used across the codebase to avoid
magic numbers and improve maintainability.
"""

from typing import Final

# ============================================================================
# CONNECTION CONSTANTS
# ============================================================================

DEFAULT_SCHEME: Final[str] = "mongodb"
"""URI scheme used when building the connection string."""

DEFAULT_PORT: Final[int] = 27017
"""Default MongoDB port."""

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""Default server selection timeout in milliseconds."""

DEFAULT_APP_NAME: Final[str] = "MDB_DRIVER"
"""Application name reported to the server in the handshake."""

# ============================================================================
# INDEX MANAGEMENT CONSTANTS
# ============================================================================

INDEX_NAME_PREFIX: Final[str] = "idx_"
"""Prefix for index names derived from key fields."""

INDEX_NAME_SEPARATOR: Final[str] = "_"
"""Separator placed between sorted field names in derived index names."""

LIST_INDEXES_TIMEOUT_SECONDS: Final[float] = 2.0
"""Upper bound for reading index metadata (seconds)."""

# ============================================================================
# METRICS CONSTANTS
# ============================================================================

MAX_METRICS: Final[int] = 10000
"""Maximum number of metric keys kept before LRU eviction."""
