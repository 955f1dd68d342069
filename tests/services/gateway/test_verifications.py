"""
Tests for the gateway verification endpoints.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from services.gateway.main import create_app
from shared.jobs import InMemoryJobQueue, InMemoryResultStore, TransportError, decode_payload
from shared.models.jobs import JobResult


class TestSubmitVerification:
    """Tests for POST /v1/verifications."""

    @pytest.mark.asyncio
    async def test_submit_returns_job_id(
        self,
        gateway_client: AsyncClient,
        memory_queue: InMemoryJobQueue,
        sample_job_request: dict,
    ):
        """Submission is accepted and the payload is queued."""
        response = await gateway_client.post("/v1/verifications", json=sample_job_request)

        assert response.status_code == 202
        job_id = response.json()["job_id"]
        assert uuid.UUID(job_id).version == 4

        payload = decode_payload(await memory_queue.pop(timeout=1))
        assert payload.job_id == job_id
        assert payload.score == 750
        assert payload.threshold == 700

    @pytest.mark.asyncio
    async def test_job_ids_are_distinct(
        self,
        gateway_client: AsyncClient,
        sample_job_request: dict,
    ):
        """Identical submissions get distinct ids."""
        job_ids = set()
        for _ in range(20):
            response = await gateway_client.post("/v1/verifications", json=sample_job_request)
            job_ids.add(response.json()["job_id"])

        assert len(job_ids) == 20

    @pytest.mark.asyncio
    async def test_below_threshold_is_still_accepted(
        self,
        gateway_client: AsyncClient,
    ):
        """The gateway does not judge the score; the worker does."""
        response = await gateway_client.post(
            "/v1/verifications",
            json={"user_id": "u1", "score": 650, "threshold": 700},
        )

        assert response.status_code == 202

    @pytest.mark.asyncio
    async def test_invalid_body(self, gateway_client: AsyncClient):
        """Negative scores are not uint64."""
        response = await gateway_client.post(
            "/v1/verifications",
            json={"submitter_id": "u1", "score": -5, "threshold": 700},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_queue_failure(self, memory_store: InMemoryResultStore, sample_job_request: dict):
        """A failed push is a server error and no job id is returned."""
        queue = AsyncMock()
        queue.push.side_effect = TransportError("connection refused")
        app = create_app(queue=queue, store=memory_store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/v1/verifications", json=sample_job_request)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}
        assert "job_id" not in response.json()


class TestGetVerification:
    """Tests for GET /v1/verifications/{job_id}."""

    @pytest.mark.asyncio
    async def test_completed_result(
        self,
        gateway_client: AsyncClient,
        memory_store: InMemoryResultStore,
    ):
        await memory_store.put("job-1", JobResult.completed("cA==", "Yw==", 1))

        response = await gateway_client.get("/v1/verifications/job-1")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["proof_b64"] == "cA=="
        assert data["commitment_b64"] == "Yw=="
        assert data["protocol_version"] == 1

    @pytest.mark.asyncio
    async def test_failed_result(
        self,
        gateway_client: AsyncClient,
        memory_store: InMemoryResultStore,
    ):
        await memory_store.put("job-2", JobResult.failed("Condition not met"))

        response = await gateway_client.get("/v1/verifications/job-2")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "FAILED"
        assert data["error_message"] == "Condition not met"
        assert data["proof_b64"] is None

    @pytest.mark.asyncio
    async def test_unknown_job(self, gateway_client: AsyncClient):
        """Absent results are 404 with the ambiguity spelled out."""
        response = await gateway_client.get("/v1/verifications/no-such-job")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Not Found"
        assert "still be processing" in data["message"]

    @pytest.mark.asyncio
    async def test_expired_job(
        self,
        gateway_client: AsyncClient,
        memory_store: InMemoryResultStore,
        clock,
    ):
        """An expired result looks exactly like an unknown id."""
        await memory_store.put("job-3", JobResult.failed("nope"))
        clock.advance(86_401)

        expired = await gateway_client.get("/v1/verifications/job-3")
        unknown = await gateway_client.get("/v1/verifications/no-such-job")

        assert expired.status_code == unknown.status_code == 404
        assert expired.json() == unknown.json()

    @pytest.mark.asyncio
    async def test_store_failure(self, memory_queue: InMemoryJobQueue):
        """A store failure is a 500, never a 404."""
        store = AsyncMock()
        store.get.side_effect = TransportError("connection reset")
        app = create_app(queue=memory_queue, store=store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/v1/verifications/job-1")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}


class TestHealth:
    """Tests for service health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, gateway_client: AsyncClient):
        response = await gateway_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "gateway"
        assert "jobs" in data["components"]

    @pytest.mark.asyncio
    async def test_root(self, gateway_client: AsyncClient):
        response = await gateway_client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "Scoreproof Gateway"
