"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from workpluck.api.main import create_app
from workpluck.client import WorkpluckClient
from workpluck.config import Settings
from workpluck.store import WorkStore


class FakeClock:
    """Manually advanced UTC clock for lease expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> WorkStore:
    """Create an empty work store driven by the fake clock."""
    return WorkStore(clock=clock)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        log_level="DEBUG",
        log_format="console",
        worker_poll_interval_seconds=0.01,
        worker_max_backoff_seconds=0.05,
    )


@pytest.fixture
def app(store: WorkStore, test_settings: Settings) -> FastAPI:
    """Create a FastAPI app serving the test store."""
    return create_app(store=store, settings=test_settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def workpluck_client(client: AsyncClient) -> AsyncGenerator[WorkpluckClient]:
    """Create a broker client talking to the test app."""
    async with WorkpluckClient(http_client=client) as wp_client:
        yield wp_client


@pytest.fixture
def sample_input() -> dict[str, Any]:
    """Create a sample task input."""
    return {"data": "x"}
