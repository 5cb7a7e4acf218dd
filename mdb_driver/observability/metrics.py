"""
Operation metrics for MDB_DRIVER.

Counts and latencies of ``connection.connect``, ``indexes.create``,
``indexes.remove`` and ``query.list``, kept in process memory per
(operation, collection) pair.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from ..constants import MAX_METRICS
from .logging import operation_scope

MetricKey = tuple[str, str | None]


@dataclass
class OperationMetrics:
    """Running totals for one operation on one collection."""

    operation: str
    collection: str | None = None
    count: int = 0
    error_count: int = 0
    total_duration_ms: float = 0.0
    max_duration_ms: float = 0.0

    @property
    def avg_duration_ms(self) -> float:
        return self.total_duration_ms / self.count if self.count else 0.0

    def record(self, duration_ms: float, success: bool) -> None:
        self.count += 1
        self.total_duration_ms += duration_ms
        self.max_duration_ms = max(self.max_duration_ms, duration_ms)
        if not success:
            self.error_count += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "collection": self.collection,
            "count": self.count,
            "error_count": self.error_count,
            "avg_duration_ms": round(self.avg_duration_ms, 2),
            "max_duration_ms": round(self.max_duration_ms, 2),
        }


class MetricsCollector:
    """
    Thread-safe, bounded store of ``OperationMetrics``.

    Once ``max_metrics`` (operation, collection) pairs exist, the pair
    recorded least recently is dropped to make room.
    """

    def __init__(self, max_metrics: int = MAX_METRICS):
        self._metrics: OrderedDict[MetricKey, OperationMetrics] = OrderedDict()
        self._lock = threading.Lock()
        self._max_metrics = max_metrics

    def record_operation(
        self,
        operation: str,
        duration_ms: float,
        success: bool = True,
        collection: str | None = None,
    ) -> None:
        key = (operation, collection)
        with self._lock:
            metrics = self._metrics.get(key)
            if metrics is None:
                if len(self._metrics) >= self._max_metrics:
                    self._metrics.popitem(last=False)
                metrics = self._metrics[key] = OperationMetrics(operation, collection)
            else:
                self._metrics.move_to_end(key)
            metrics.record(duration_ms, success)

    def snapshot(self, operation: str | None = None) -> list[dict[str, Any]]:
        """
        Current totals, optionally only for ``operation``.

        Returns:
            One dict per (operation, collection) pair, oldest first
        """
        with self._lock:
            return [
                m.to_dict()
                for m in self._metrics.values()
                if operation is None or m.operation == operation
            ]

    def get_operation_count(self, operation: str, collection: str | None = None) -> int:
        """Executions of ``operation``, across all collections unless one is given."""
        return sum(m.count for m in self._matching(operation, collection))

    def get_error_count(self, operation: str, collection: str | None = None) -> int:
        """Failed executions of ``operation``, filtered like ``get_operation_count``."""
        return sum(m.error_count for m in self._matching(operation, collection))

    def _matching(self, operation: str, collection: str | None) -> list[OperationMetrics]:
        with self._lock:
            return [
                m
                for m in self._metrics.values()
                if m.operation == operation and (collection is None or m.collection == collection)
            ]

    def reset(self) -> None:
        with self._lock:
            self._metrics.clear()


_metrics_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector() -> MetricsCollector:
    """Get or create the process-wide metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def record_operation(
    operation: str, duration_ms: float, success: bool = True, collection: str | None = None
) -> None:
    """Record one execution in the process-wide collector."""
    get_metrics_collector().record_operation(operation, duration_ms, success, collection)


@contextmanager
def tracked_operation(operation: str, collection: str | None = None) -> Iterator[dict[str, Any]]:
    """
    Time the block as one execution of ``operation`` on ``collection``.

    The block also runs inside an ``operation_scope``, so contextual log
    records emitted in it carry ``operation`` and ``collection_name``.
    Leaving the block with an exception counts as a failure; the exception
    propagates unchanged.

    Usage:
        with tracked_operation("indexes.remove", collection.name):
            collection.drop_index(name)
    """
    fields = {"collection_name": collection} if collection else {}
    start_time = time.perf_counter()
    success = False
    try:
        with operation_scope(operation, **fields) as scope:
            yield scope
        success = True
    finally:
        record_operation(
            operation, (time.perf_counter() - start_time) * 1000, success, collection
        )
