"""
Test Configuration
==================

Pytest fixtures for scoreproof tests.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["JOBS_BACKEND"] = "memory"

from shared.jobs import InMemoryJobQueue, InMemoryResultStore  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_queue() -> InMemoryJobQueue:
    """Fresh in-memory job queue."""
    return InMemoryJobQueue()


@pytest.fixture
def memory_store(clock: FakeClock) -> InMemoryResultStore:
    """Fresh in-memory result store on a fake clock."""
    return InMemoryResultStore(clock=clock)


@pytest_asyncio.fixture
async def gateway_client(
    memory_queue: InMemoryJobQueue,
    memory_store: InMemoryResultStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Gateway Service on the in-memory backend."""
    from services.gateway.main import create_app

    app = create_app(queue=memory_queue, store=memory_store)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def sample_job_request() -> dict[str, object]:
    """Sample submission body."""
    return {
        "submitter_id": "user-42",
        "score": 750,
        "threshold": 700,
    }
