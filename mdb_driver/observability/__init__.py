"""
Observability components.

Provides contextual logging, operation metrics and a MongoDB health check.
"""

from .health import HealthCheckResult, HealthStatus, check_mongodb_health
from .logging import (
    ContextualLoggerAdapter,
    clear_correlation_id,
    current_log_fields,
    get_correlation_id,
    get_logger,
    operation_scope,
    set_correlation_id,
)
from .metrics import (
    MetricsCollector,
    OperationMetrics,
    get_metrics_collector,
    record_operation,
    tracked_operation,
)

__all__ = [
    # Metrics
    "MetricsCollector",
    "OperationMetrics",
    "get_metrics_collector",
    "record_operation",
    "tracked_operation",
    # Logging
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "operation_scope",
    "current_log_fields",
    "ContextualLoggerAdapter",
    "get_logger",
    # Health
    "HealthStatus",
    "HealthCheckResult",
    "check_mongodb_health",
]
