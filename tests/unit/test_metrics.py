"""
Unit tests for store metrics.
"""

from datetime import timedelta

import pytest
from prometheus_client import CollectorRegistry

from workpluck.constants import LEASE_TTL
from workpluck.observability.metrics import MetricsCollector
from workpluck.store import WorkStore


class TestStoreMetrics:
    """Tests for metrics recorded by the work store."""

    @pytest.fixture
    def registry(self) -> CollectorRegistry:
        return CollectorRegistry()

    @pytest.fixture
    def metered_store(self, registry: CollectorRegistry, clock) -> WorkStore:
        """Create a store reporting to an isolated registry."""
        return WorkStore(clock=clock, metrics=MetricsCollector(registry=registry))

    def test_submission_and_lease_counters(
        self,
        metered_store: WorkStore,
        registry: CollectorRegistry,
    ):
        """Test submission, lease and empty-poll counters."""
        metered_store.submit_task("t", {"data": "x"})
        metered_store.lease_task("t")
        metered_store.lease_task("t")

        assert registry.get_sample_value("tasks_submitted_total", {"topic": "t"}) == 1
        assert registry.get_sample_value("leases_acquired_total", {"topic": "t"}) == 1
        assert registry.get_sample_value("lease_empty_total", {"topic": "t"}) == 1

    def test_reclaim_counter(
        self,
        metered_store: WorkStore,
        registry: CollectorRegistry,
        clock,
    ):
        """Test that reclaimed leases are counted separately."""
        metered_store.submit_task("t", {"data": "x"})
        metered_store.lease_task("t")
        clock.advance(LEASE_TTL + timedelta(seconds=1))
        metered_store.lease_task("t")

        assert registry.get_sample_value("leases_acquired_total", {"topic": "t"}) == 2
        assert registry.get_sample_value("lease_reclaimed_total", {"topic": "t"}) == 1

    def test_task_gauge(
        self,
        metered_store: WorkStore,
        registry: CollectorRegistry,
    ):
        """Test the per-status task gauge."""
        first = metered_store.submit_task("t", {"data": 1})
        metered_store.submit_task("t", {"data": 2})
        metered_store.submit_result(first, {"ok": True})

        assert registry.get_sample_value("workpluck_tasks", {"status": "new"}) == 1
        assert registry.get_sample_value("workpluck_tasks", {"status": "completed"}) == 1
        assert registry.get_sample_value("workpluck_tasks", {"status": "pending"}) == 0
        assert registry.get_sample_value("results_submitted_total") == 1

    def test_api_request_recorded(self, registry: CollectorRegistry):
        """Test API request counter and latency histogram."""
        metrics = MetricsCollector(registry=registry)

        metrics.record_api_request("GET", "/task", 204, 0.002)

        labels = {"method": "GET", "endpoint": "/task", "status": "204"}
        assert registry.get_sample_value("api_requests_total", labels) == 1
        assert registry.get_sample_value(
            "api_request_latency_seconds_count",
            {"method": "GET", "endpoint": "/task"},
        ) == 1
