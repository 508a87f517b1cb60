"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from workpluck.constants import (
    METRIC_API_LATENCY,
    METRIC_API_REQUESTS,
    METRIC_LEASE_ACQUIRED,
    METRIC_LEASE_EMPTY,
    METRIC_LEASE_RECLAIMED,
    METRIC_RESULTS_SUBMITTED,
    METRIC_TASKS,
    METRIC_TASKS_SUBMITTED,
    TaskStatus,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for the work broker.

    Collects metrics for:
    - Tasks held by the store, by status
    - Task submissions
    - Lease operations, including reclaimed and empty polls
    - Result submissions
    - API requests
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.tasks = Gauge(
            METRIC_TASKS,
            "Number of tasks in the store",
            ["status"],
            registry=self._registry,
        )

        self.tasks_submitted = Counter(
            METRIC_TASKS_SUBMITTED,
            "Total number of tasks submitted",
            ["topic"],
            registry=self._registry,
        )

        self.lease_acquired = Counter(
            METRIC_LEASE_ACQUIRED,
            "Total number of leases acquired",
            ["topic"],
            registry=self._registry,
        )

        self.lease_reclaimed = Counter(
            METRIC_LEASE_RECLAIMED,
            "Total number of expired leases handed to a new worker",
            ["topic"],
            registry=self._registry,
        )

        self.lease_empty = Counter(
            METRIC_LEASE_EMPTY,
            "Total number of lease polls that found no task",
            ["topic"],
            registry=self._registry,
        )

        self.results_submitted = Counter(
            METRIC_RESULTS_SUBMITTED,
            "Total number of results submitted",
            registry=self._registry,
        )

        self.api_requests = Counter(
            METRIC_API_REQUESTS,
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self._registry,
        )

        self.api_latency = Histogram(
            METRIC_API_LATENCY,
            "API request latency in seconds",
            ["method", "endpoint"],
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

    def record_task_submitted(self, topic: str) -> None:
        """Record a task submission."""
        self.tasks_submitted.labels(topic=topic).inc()

    def record_lease_acquired(self, topic: str, reclaimed: bool = False) -> None:
        """Record lease acquisition."""
        self.lease_acquired.labels(topic=topic).inc()
        if reclaimed:
            self.lease_reclaimed.labels(topic=topic).inc()

    def record_lease_empty(self, topic: str) -> None:
        """Record a poll that found nothing to lease."""
        self.lease_empty.labels(topic=topic).inc()

    def record_result_submitted(self) -> None:
        """Record a result submission."""
        self.results_submitted.inc()

    def update_task_counts(self, counts: dict[TaskStatus, int]) -> None:
        """Update the per-status task gauge."""
        for status, count in counts.items():
            self.tasks.labels(status=status.value).set(count)

    def record_api_request(
        self,
        method: str,
        endpoint: str,
        status: int,
        duration_seconds: float,
    ) -> None:
        """Record an API request."""
        self.api_requests.labels(
            method=method,
            endpoint=endpoint,
            status=str(status),
        ).inc()
        self.api_latency.labels(method=method, endpoint=endpoint).observe(
            duration_seconds
        )

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """
    Get the metrics collector instance, creating it on first use.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    if _metrics is None:
        return setup_metrics()
    return _metrics
