"""
Request metrics and logging context middleware.
"""

import time
from collections.abc import Callable

from fastapi import Request

from workpluck.observability.logging import bind_context, clear_context
from workpluck.observability.metrics import MetricsCollector


def create_metrics_middleware(metrics: MetricsCollector) -> Callable:
    """
    Create request metrics middleware for FastAPI.

    Args:
        metrics: Collector receiving request counts and latencies.

    Returns:
        The middleware function.
    """

    async def metrics_middleware(request: Request, call_next: Callable):
        """Time the request and bind method/path to the log context."""
        clear_context()
        bind_context(method=request.method, path=request.url.path)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            clear_context()

        # Label by route template; unknown paths share one label
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")

        metrics.record_api_request(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
            duration_seconds=time.perf_counter() - start,
        )
        return response

    return metrics_middleware
