"""
In-Memory Job Backend
=====================

Process-local queue and result store with the same contracts as the Redis
backend. Used for local development (JOBS_BACKEND=memory) and tests.

Values are kept in their serialized form so both backends exercise the
same encode/decode paths.

Version: 0.1.0
"""

import asyncio
import time
from collections.abc import Callable

from shared.jobs.keys import RESULT_TTL_SECONDS, result_key
from shared.jobs.queue import encode_payload
from shared.jobs.store import parse_result
from shared.models.jobs import JobPayload, JobResult


class InMemoryJobQueue:
    """FIFO queue backed by asyncio.Queue."""

    def __init__(self) -> None:
        self._messages: asyncio.Queue[bytes] = asyncio.Queue()

    async def push(self, payload: JobPayload) -> None:
        await self.push_raw(encode_payload(payload))

    async def push_raw(self, message: bytes) -> None:
        self._messages.put_nowait(message)

    async def pop(self, timeout: float | None = None) -> bytes | None:
        """Block until a message is available or the timeout elapses."""
        if timeout is None:
            return await self._messages.get()
        try:
            return await asyncio.wait_for(self._messages.get(), timeout)
        except TimeoutError:
            return None

    def __len__(self) -> int:
        return self._messages.qsize()


class InMemoryResultStore:
    """
    Dict-backed result store with expiry.

    Args:
        clock: Monotonic seconds source; tests pass a fake one
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    async def put(
        self,
        job_id: str,
        result: JobResult,
        ttl_seconds: int = RESULT_TTL_SECONDS,
    ) -> None:
        expires_at = self._clock() + ttl_seconds
        self._entries[result_key(job_id)] = (result.model_dump_json(), expires_at)

    async def get(self, job_id: str) -> JobResult | None:
        key = result_key(job_id)
        entry = self._entries.get(key)
        if entry is None:
            return None

        raw, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return parse_result(job_id, raw)
