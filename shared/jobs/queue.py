"""
Job Queue
=========

Durable channel carrying job payloads from the gateway to the worker.

Producers LPUSH onto a single named list and the consumer BRPOPs from the
other end, so jobs are served oldest first. There is no acknowledgement:
a job popped by a worker that dies before writing its result is lost.

Version: 0.1.0
"""

from typing import Protocol

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from shared.jobs.exceptions import PayloadDecodeError, TransportError
from shared.jobs.keys import JOB_QUEUE_KEY
from shared.logging import get_logger
from shared.models.jobs import JobPayload


logger = get_logger(__name__)


class JobQueue(Protocol):
    """Queue contract shared by the Redis and in-memory backends."""

    async def push(self, payload: JobPayload) -> None: ...

    async def push_raw(self, message: bytes) -> None: ...

    async def pop(self, timeout: float | None = None) -> bytes | None: ...


def encode_payload(payload: JobPayload) -> bytes:
    return payload.model_dump_json().encode("utf-8")


def decode_payload(message: bytes | str) -> JobPayload:
    """
    Parse a raw queue message.

    Raises:
        PayloadDecodeError: If the message is not UTF-8 JSON describing a payload
    """
    try:
        text = message.decode("utf-8") if isinstance(message, bytes) else message
        return JobPayload.model_validate_json(text)
    except (UnicodeDecodeError, ValidationError) as e:
        raise PayloadDecodeError(str(e)) from e


class RedisJobQueue:
    """
    Redis list-backed job queue.

    Usage:
        queue = RedisJobQueue(RedisClient.get_client())
        await queue.push(payload)
        message = await queue.pop()
    """

    def __init__(self, client: Redis, key: str = JOB_QUEUE_KEY):  # type: ignore[type-arg]
        self.client = client
        self.key = key

    async def push(self, payload: JobPayload) -> None:
        """
        Enqueue a payload.

        Raises:
            TransportError: If Redis rejects or cannot receive the push
        """
        await self.push_raw(encode_payload(payload))

    async def push_raw(self, message: bytes) -> None:
        try:
            await self.client.lpush(self.key, message)
        except (RedisError, OSError) as e:
            logger.error("job_queue_push_failed", queue=self.key, error=str(e))
            raise TransportError(f"Failed to push to {self.key}: {e}") from e

    async def pop(self, timeout: float | None = None) -> bytes | None:
        """
        Block until a message is available.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Returns:
            The raw message, or None if the timeout elapsed
        """
        try:
            item = await self.client.brpop([self.key], timeout=timeout or 0)
        except (RedisError, OSError) as e:
            logger.error("job_queue_pop_failed", queue=self.key, error=str(e))
            raise TransportError(f"Failed to pop from {self.key}: {e}") from e

        if item is None:
            return None
        _, message = item
        return message
