"""
Unit tests for the Redis job backend.

The Redis client is mocked; these tests pin the commands and keys used.
"""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shared.jobs import (
    JOB_QUEUE_KEY,
    RedisJobQueue,
    RedisResultStore,
    ResultDecodeError,
    TransportError,
    result_key,
)
from shared.models.jobs import JobPayload, JobResult, JobStatus


@pytest.fixture
def redis_mock() -> AsyncMock:
    return AsyncMock()


class TestRedisJobQueue:
    """Tests for RedisJobQueue."""

    @pytest.mark.asyncio
    async def test_push_uses_lpush(self, redis_mock: AsyncMock) -> None:
        queue = RedisJobQueue(redis_mock)
        payload = JobPayload(job_id="job-1", submitter_id="u1", score=750, threshold=700)

        await queue.push(payload)

        redis_mock.lpush.assert_awaited_once()
        key, message = redis_mock.lpush.await_args.args
        assert key == JOB_QUEUE_KEY == "zkp:jobs"
        assert json.loads(message) == payload.model_dump()

    @pytest.mark.asyncio
    async def test_pop_blocks_indefinitely(self, redis_mock: AsyncMock) -> None:
        redis_mock.brpop.return_value = (b"zkp:jobs", b"{}")
        queue = RedisJobQueue(redis_mock)

        message = await queue.pop()

        assert message == b"{}"
        redis_mock.brpop.assert_awaited_once_with(["zkp:jobs"], timeout=0)

    @pytest.mark.asyncio
    async def test_pop_timeout(self, redis_mock: AsyncMock) -> None:
        redis_mock.brpop.return_value = None

        assert await RedisJobQueue(redis_mock).pop(timeout=1) is None

    @pytest.mark.asyncio
    async def test_transport_error(self, redis_mock: AsyncMock) -> None:
        redis_mock.lpush.side_effect = RedisConnectionError("connection refused")
        queue = RedisJobQueue(redis_mock)

        with pytest.raises(TransportError):
            await queue.push_raw(b"{}")


class TestRedisResultStore:
    """Tests for RedisResultStore."""

    @pytest.mark.asyncio
    async def test_put_sets_expiry(self, redis_mock: AsyncMock) -> None:
        store = RedisResultStore(redis_mock)
        result = JobResult.failed("nope")

        await store.put("job-1", result)

        redis_mock.set.assert_awaited_once_with(
            "zkp:result:job-1",
            result.model_dump_json(),
            ex=86_400,
        )

    @pytest.mark.asyncio
    async def test_get(self, redis_mock: AsyncMock) -> None:
        redis_mock.get.return_value = JobResult.completed("cA==", "Yw==", 1).model_dump_json().encode()

        result = await RedisResultStore(redis_mock).get("job-1")

        assert result is not None
        assert result.status == JobStatus.COMPLETED
        redis_mock.get.assert_awaited_once_with(result_key("job-1"))

    @pytest.mark.asyncio
    async def test_get_missing(self, redis_mock: AsyncMock) -> None:
        redis_mock.get.return_value = None

        assert await RedisResultStore(redis_mock).get("job-1") is None

    @pytest.mark.asyncio
    async def test_get_unreadable(self, redis_mock: AsyncMock) -> None:
        redis_mock.get.return_value = b"not json"

        with pytest.raises(ResultDecodeError):
            await RedisResultStore(redis_mock).get("job-1")

    @pytest.mark.asyncio
    async def test_get_transport_error(self, redis_mock: AsyncMock) -> None:
        redis_mock.get.side_effect = RedisConnectionError("connection reset")

        with pytest.raises(TransportError):
            await RedisResultStore(redis_mock).get("job-1")
