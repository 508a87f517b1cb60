"""
Health check routes.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from workpluck import __version__
from workpluck.api.dependencies import WorkStoreDep
from workpluck.observability.metrics import get_metrics
from workpluck.store import WorkStore, utc_now
from workpluck.types.api import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health of the API and report store sizes.",
)
def health_check(store: WorkStoreDep) -> HealthResponse:
    """
    Perform a health check.

    Args:
        store: The work store.

    Returns:
        HealthResponse with service status.
    """
    counts = store.counts()

    return HealthResponse(
        status="healthy",
        version=__version__,
        tasks=sum(counts.values()),
        results=store.result_count(),
        timestamp=utc_now(),
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the service is ready to receive traffic.",
)
async def readiness_check(request: Request, response: Response) -> dict:
    """
    Kubernetes readiness probe endpoint.

    Ready once the application holds its work store.

    Args:
        request: The incoming request.
        response: Response whose status is set to 503 when not ready.

    Returns:
        Ready status.
    """
    ready = isinstance(getattr(request.app.state, "work_store", None), WorkStore)
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"ready": ready}


@router.get(
    "/live",
    summary="Liveness check",
    description="Check if the service is alive.",
)
async def liveness_check() -> dict:
    """
    Kubernetes liveness probe endpoint.

    Returns:
        Alive status.
    """
    return {"alive": True}


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Expose Prometheus metrics.",
)
async def metrics() -> Response:
    """
    Expose Prometheus metrics.

    Returns:
        Prometheus-formatted metrics.
    """
    metrics_collector = get_metrics()
    return Response(
        content=metrics_collector.get_metrics(),
        media_type=metrics_collector.get_content_type(),
    )
