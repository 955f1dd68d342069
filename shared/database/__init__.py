"""
Database Module
===============

Async Redis client backing the job queue and result store.

Usage:
    from shared.database import RedisClient

    client = RedisClient.get_client()
    await client.ping()
"""

from shared.database.redis import RedisClient


__all__ = [
    "RedisClient",
]
