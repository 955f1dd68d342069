"""
Redis Client
============

Async Redis client backing the job queue and result store.

The client returns raw bytes; the jobs layer owns decoding so that a
payload which is not valid UTF-8 surfaces as a decode error for that one
message instead of breaking the connection.

Version: 0.1.0
"""

import time
from typing import Any

import redis.asyncio as aioredis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from shared.config import settings
from shared.logging import get_logger

logger = get_logger(__name__)


class RedisClient:
    """
    Async Redis client wrapper.

    Provides connection management. Components never reach for the
    singleton themselves; service entry points pass the client in.
    """

    _client: Redis | None = None  # type: ignore[type-arg]

    @classmethod
    def get_client(cls) -> Redis:  # type: ignore[type-arg]
        """Get or create the async client."""
        if cls._client is None:
            cls._client = cls.create_client()
            logger.info(
                "redis_client_created",
                host=settings.redis.host,
                port=settings.redis.port,
            )
        return cls._client

    @staticmethod
    def create_client(url: str | None = None) -> Redis:  # type: ignore[type-arg]
        """
        Create a standalone client that is not cached.

        Args:
            url: Connection URL (defaults to settings.redis.url)
        """
        return aioredis.from_url(
            url or settings.redis.url,
            decode_responses=False,
            max_connections=50,
        )

    @classmethod
    async def close(cls) -> None:
        """Close the client and release all connections."""
        if cls._client is not None:
            await cls._client.aclose()
            cls._client = None
            logger.info("redis_client_closed")

    @classmethod
    async def health_check(cls) -> dict[str, Any]:
        """
        Check Redis health.

        Returns:
            dict with status and server info
        """
        try:
            start = time.perf_counter()
            client = cls.get_client()
            pong = await client.ping()
            latency_ms = (time.perf_counter() - start) * 1000

            # Get server info
            info = await client.info("server")

            return {
                "status": "healthy" if pong else "unhealthy",
                "latency_ms": round(latency_ms, 2),
                "redis_version": info.get("redis_version", "unknown"),
                "uptime_seconds": info.get("uptime_in_seconds", 0),
            }
        except (RedisError, OSError) as e:
            logger.error("redis_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e),
            }
