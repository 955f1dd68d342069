"""
Proof Worker
============

Single-consumer loop turning queued jobs into stored results.

Version: 0.1.0
"""

import asyncio

from shared.jobs import (
    RESULT_TTL_SECONDS,
    JobQueue,
    PayloadDecodeError,
    ResultStore,
    decode_payload,
)
from shared.logging import bind_context, clear_context, get_logger
from shared.models.jobs import JobPayload, JobResult
from shared.zk import CURRENT_PROTOCOL, ProofProtocolError, ProtocolParameters, prove


logger = get_logger(__name__)


class ProofWorker:
    """
    Pops jobs, proves them, and stores the outcome.

    A message that cannot be decoded is logged and dropped; it never stops
    the loop. Queue or store transport errors do stop it, leaving restarts
    to the process supervisor.

    Usage:
        worker = ProofWorker(RedisJobQueue(client), RedisResultStore(client))
        await worker.run()
    """

    def __init__(
        self,
        queue: JobQueue,
        store: ResultStore,
        params: ProtocolParameters = CURRENT_PROTOCOL,
        result_ttl_seconds: int = RESULT_TTL_SECONDS,
    ):
        self.queue = queue
        self.store = store
        self.params = params
        self.result_ttl_seconds = result_ttl_seconds

    async def run(self, max_jobs: int | None = None) -> int:
        """
        Consume messages until cancelled.

        Args:
            max_jobs: Stop after this many messages (decoded or not)

        Returns:
            Number of messages consumed

        Raises:
            TransportError: If the queue or store fails
        """
        logger.info(
            "proof_worker_started",
            protocol_version=self.params.version,
            max_jobs=max_jobs,
        )
        consumed = 0
        while max_jobs is None or consumed < max_jobs:
            message = await self.queue.pop()
            if message is None:
                continue
            consumed += 1
            await self.handle(message)

        logger.info("proof_worker_stopped", consumed=consumed)
        return consumed

    async def handle(self, message: bytes | str) -> JobResult | None:
        """
        Process one raw queue message.

        Returns:
            The stored result, or None if the message was dropped
        """
        try:
            payload = decode_payload(message)
        except PayloadDecodeError as e:
            logger.warning("job_payload_decode_failed", error=str(e))
            return None

        bind_context(job_id=payload.job_id)
        try:
            result = await self.process(payload)
            await self.store.put(payload.job_id, result, self.result_ttl_seconds)
            logger.info("job_result_stored", status=result.status.value)
            return result
        finally:
            clear_context()

    async def process(self, payload: JobPayload) -> JobResult:
        """Prove one payload; a protocol refusal becomes a FAILED result."""
        try:
            zk_proof = await asyncio.to_thread(
                prove, payload.score, payload.threshold, self.params
            )
        except ProofProtocolError as e:
            logger.info("job_proof_refused", reason=type(e).__name__)
            return JobResult.failed(str(e))

        proof_b64, commitment_b64 = zk_proof.to_transport()
        return JobResult.completed(proof_b64, commitment_b64, self.params.version)
