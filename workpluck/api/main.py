"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

import uvicorn
from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from workpluck import __version__
from workpluck.api.errors import register_exception_handlers
from workpluck.api.middleware import create_metrics_middleware
from workpluck.api.routes import health_router, observe_router, results_router, tasks_router
from workpluck.config import Settings, get_settings
from workpluck.observability.logging import setup_logging
from workpluck.observability.metrics import setup_metrics
from workpluck.observability.tracing import instrument_fastapi, setup_tracing
from workpluck.store import WorkStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    setup_logging(settings)
    setup_tracing(settings)

    logger.info(
        "Application started",
        extra={"lease_ttl_seconds": app.state.work_store.lease_ttl.total_seconds()},
    )

    yield

    logger.info("Application shutdown")


def create_app(
    store: WorkStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The application owns one WorkStore for its whole lifetime.

    Args:
        store: Store to serve. A new one is built from settings if omitted.
        settings: Settings to use instead of the cached environment settings.

    Returns:
        FastAPI: The configured application instance.
    """
    settings = settings or get_settings()
    metrics = setup_metrics()

    if store is None:
        store = WorkStore(
            lease_ttl=timedelta(seconds=settings.lease_ttl_seconds),
            metrics=metrics,
        )

    app = FastAPI(
        title="workpluck",
        description="Topic-based work distribution broker with lease-based retrieval",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.work_store = store

    app.add_middleware(
        BaseHTTPMiddleware,
        dispatch=create_metrics_middleware(metrics),
    )

    register_exception_handlers(app)

    app.include_router(tasks_router)
    app.include_router(results_router)
    app.include_router(observe_router)
    app.include_router(health_router)

    instrument_fastapi(app)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
