"""
Jobs Module
===========

Job queue and result store contracts with Redis and in-memory backends.

Usage:
    from shared.jobs import RedisJobQueue, RedisResultStore

    queue = RedisJobQueue(client)
    store = RedisResultStore(client)

    await queue.push(payload)
    result = await store.get(job_id)
"""

from shared.jobs.exceptions import (
    JobsError,
    PayloadDecodeError,
    ResultDecodeError,
    TransportError,
)
from shared.jobs.keys import (
    JOB_QUEUE_KEY,
    RESULT_KEY_PREFIX,
    RESULT_TTL_SECONDS,
    result_key,
)
from shared.jobs.memory import InMemoryJobQueue, InMemoryResultStore
from shared.jobs.queue import JobQueue, RedisJobQueue, decode_payload, encode_payload
from shared.jobs.store import RedisResultStore, ResultStore, parse_result


__all__ = [
    # Contracts
    "JobQueue",
    "ResultStore",
    # Redis backend
    "RedisJobQueue",
    "RedisResultStore",
    # In-memory backend
    "InMemoryJobQueue",
    "InMemoryResultStore",
    # Encoding
    "encode_payload",
    "decode_payload",
    "parse_result",
    # Keys
    "JOB_QUEUE_KEY",
    "RESULT_KEY_PREFIX",
    "RESULT_TTL_SECONDS",
    "result_key",
    # Errors
    "JobsError",
    "TransportError",
    "PayloadDecodeError",
    "ResultDecodeError",
]
