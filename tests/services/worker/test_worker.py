"""
Tests for the proof worker.
"""

from unittest.mock import AsyncMock

import pytest

from services.worker.worker import ProofWorker
from shared.jobs import InMemoryJobQueue, InMemoryResultStore, TransportError
from shared.models.jobs import JobPayload, JobStatus
from shared.zk import ZkProof, verify


def _payload(job_id: str, score: int = 750, threshold: int = 700) -> JobPayload:
    return JobPayload(job_id=job_id, submitter_id="u1", score=score, threshold=threshold)


@pytest.fixture
def worker(memory_queue: InMemoryJobQueue, memory_store: InMemoryResultStore) -> ProofWorker:
    return ProofWorker(memory_queue, memory_store)


class TestProofWorker:
    """Tests for ProofWorker."""

    @pytest.mark.asyncio
    async def test_completed_job(
        self,
        worker: ProofWorker,
        memory_queue: InMemoryJobQueue,
        memory_store: InMemoryResultStore,
    ):
        """A passing score produces a stored, verifiable proof."""
        await memory_queue.push(_payload("job-ok"))

        consumed = await worker.run(max_jobs=1)

        assert consumed == 1
        result = await memory_store.get("job-ok")
        assert result is not None
        assert result.status == JobStatus.COMPLETED
        assert result.error_message is None
        assert result.protocol_version == 1
        assert verify(ZkProof.from_transport(result.proof_b64, result.commitment_b64))

    @pytest.mark.asyncio
    async def test_failed_job(
        self,
        worker: ProofWorker,
        memory_queue: InMemoryJobQueue,
        memory_store: InMemoryResultStore,
    ):
        """A failing score produces a FAILED result with the reason and no proof."""
        await memory_queue.push(_payload("job-low", score=650))

        await worker.run(max_jobs=1)

        result = await memory_store.get("job-low")
        assert result is not None
        assert result.status == JobStatus.FAILED
        assert result.error_message == "Condition not met: Score 650 is less than threshold 700."
        assert result.proof_b64 is None
        assert result.commitment_b64 is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "message",
        [
            b"not json",
            b"\xff\xfe\x00",
            b'{"job_id": "x"}',
            b'{"job_id": "x", "submitter_id": "u1", "score": -1, "threshold": 700}',
        ],
    )
    async def test_poison_message_is_dropped(
        self,
        worker: ProofWorker,
        memory_queue: InMemoryJobQueue,
        memory_store: InMemoryResultStore,
        message: bytes,
    ):
        """Malformed messages write nothing and do not stop the loop."""
        await memory_queue.push_raw(message)
        await memory_queue.push(_payload("job-after"))

        consumed = await worker.run(max_jobs=2)

        assert consumed == 2
        assert await memory_store.get("x") is None
        result = await memory_store.get("job-after")
        assert result is not None
        assert result.status == JobStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_handle_returns_none_for_poison(self, worker: ProofWorker):
        assert await worker.handle(b"[]") is None

    @pytest.mark.asyncio
    async def test_result_ttl(
        self,
        memory_queue: InMemoryJobQueue,
        memory_store: InMemoryResultStore,
        clock,
    ):
        """Results expire after the configured TTL."""
        worker = ProofWorker(memory_queue, memory_store, result_ttl_seconds=60)
        await memory_queue.push(_payload("job-ttl", score=1))

        await worker.run(max_jobs=1)

        assert await memory_store.get("job-ttl") is not None
        clock.advance(61)
        assert await memory_store.get("job-ttl") is None

    @pytest.mark.asyncio
    async def test_store_failure_stops_worker(self, memory_queue: InMemoryJobQueue):
        """Transport errors end the loop instead of being swallowed."""
        store = AsyncMock()
        store.put.side_effect = TransportError("connection reset")
        worker = ProofWorker(memory_queue, store)
        await memory_queue.push(_payload("job-1", score=1))
        await memory_queue.push(_payload("job-2", score=1))

        with pytest.raises(TransportError):
            await worker.run(max_jobs=2)

        assert len(memory_queue) == 1
