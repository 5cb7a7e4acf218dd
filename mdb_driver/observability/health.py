"""
Health check utilities for MDB_DRIVER.

Provides a MongoDB liveness check that reports rather than raises.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

import pymongo
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status enumeration."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    name: str
    status: HealthStatus
    message: str
    details: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def healthy(self) -> bool:
        """Whether the check passed."""
        return self.status is HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


def check_mongodb_health(target: Any | None, timeout_seconds: float = 5.0) -> HealthCheckResult:
    """
    Check MongoDB connection health.

    Args:
        target: A ``MongoDriver`` or a ``pymongo.MongoClient``
        timeout_seconds: Upper bound for the ping

    Returns:
        HealthCheckResult
    """
    if target is None:
        return HealthCheckResult(
            name="mongodb",
            status=HealthStatus.UNHEALTHY,
            message="MongoDB client not initialized",
        )

    start_time = time.time()
    try:
        from ..core.connection import MongoDriver

        client = target.client if isinstance(target, MongoDriver) else target
        with pymongo.timeout(timeout_seconds):
            client.admin.command("ping")
    except (PyMongoError, RuntimeError, AttributeError) as e:
        logger.warning(f"MongoDB health check failed: {e}")
        return HealthCheckResult(
            name="mongodb",
            status=HealthStatus.UNHEALTHY,
            message=f"MongoDB health check failed: {e}",
            details={"error_type": type(e).__name__, "timeout_seconds": timeout_seconds},
        )

    latency_ms = (time.time() - start_time) * 1000
    return HealthCheckResult(
        name="mongodb",
        status=HealthStatus.HEALTHY,
        message="MongoDB connection is healthy",
        details={"latency_ms": round(latency_ms, 2), "timeout_seconds": timeout_seconds},
    )
