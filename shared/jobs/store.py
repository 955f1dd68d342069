"""
Result Store
============

Keyed, expiring storage for job results.

An absent key means the job is still running, the id was never issued, or
the result has expired; callers cannot tell these apart.

Version: 0.1.0
"""

from typing import Protocol

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from shared.jobs.exceptions import ResultDecodeError, TransportError
from shared.jobs.keys import RESULT_TTL_SECONDS, result_key
from shared.logging import get_logger
from shared.models.jobs import JobResult


logger = get_logger(__name__)


class ResultStore(Protocol):
    """Result store contract shared by the Redis and in-memory backends."""

    async def put(
        self,
        job_id: str,
        result: JobResult,
        ttl_seconds: int = RESULT_TTL_SECONDS,
    ) -> None: ...

    async def get(self, job_id: str) -> JobResult | None: ...


def parse_result(job_id: str, raw: bytes | str) -> JobResult:
    """
    Parse a stored result.

    Raises:
        ResultDecodeError: If the stored value is not a valid JobResult
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        return JobResult.model_validate_json(text)
    except (UnicodeDecodeError, ValidationError) as e:
        raise ResultDecodeError(job_id, str(e)) from e


class RedisResultStore:
    """Result store on plain Redis string keys with expiry."""

    def __init__(self, client: Redis):  # type: ignore[type-arg]
        self.client = client

    async def put(
        self,
        job_id: str,
        result: JobResult,
        ttl_seconds: int = RESULT_TTL_SECONDS,
    ) -> None:
        """
        Write a result with an expiry.

        Raises:
            TransportError: If the write fails
        """
        key = result_key(job_id)
        try:
            await self.client.set(key, result.model_dump_json(), ex=ttl_seconds)
        except (RedisError, OSError) as e:
            logger.error("result_store_put_failed", job_id=job_id, error=str(e))
            raise TransportError(f"Failed to store result for {job_id}: {e}") from e

    async def get(self, job_id: str) -> JobResult | None:
        """
        Read a result.

        Returns:
            The stored result, or None if absent

        Raises:
            TransportError: If the read fails
            ResultDecodeError: If the stored value is unreadable
        """
        try:
            raw = await self.client.get(result_key(job_id))
        except (RedisError, OSError) as e:
            logger.error("result_store_get_failed", job_id=job_id, error=str(e))
            raise TransportError(f"Failed to read result for {job_id}: {e}") from e

        if raw is None:
            return None
        return parse_result(job_id, raw)
