"""
Submission and Status Components
================================

Transport-agnostic halves of the gateway: minting and enqueueing jobs, and
looking up their results.

Version: 0.1.0
"""

import uuid

from shared.jobs import JobQueue, ResultStore
from shared.logging import get_logger
from shared.models.jobs import JobPayload, JobRequest, JobResult


logger = get_logger(__name__)


class SubmissionGateway:
    """
    Turns client requests into queued jobs.

    Usage:
        gateway = SubmissionGateway(queue)
        job_id = await gateway.submit(JobRequest(submitter_id="u1", score=750, threshold=700))
    """

    def __init__(self, queue: JobQueue):
        self.queue = queue

    async def submit(self, request: JobRequest) -> str:
        """
        Mint a job id and enqueue the payload.

        The id is only returned once the push has succeeded.

        Raises:
            TransportError: If the queue cannot accept the payload
        """
        job_id = str(uuid.uuid4())
        await self.queue.push(JobPayload.from_request(job_id, request))

        logger.info(
            "job_enqueued",
            job_id=job_id,
            submitter_id=request.submitter_id,
        )
        return job_id


class StatusEndpoint:
    """Reads job results back out of the store."""

    def __init__(self, store: ResultStore):
        self.store = store

    async def lookup(self, job_id: str) -> JobResult | None:
        """
        Fetch a job's result.

        Returns:
            The result, or None if it is not (or no longer) stored

        Raises:
            TransportError: If the store cannot be read
            ResultDecodeError: If the stored value is unreadable
        """
        result = await self.store.get(job_id)
        logger.debug("job_status_lookup", job_id=job_id, found=result is not None)
        return result
