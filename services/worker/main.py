"""
Worker Service - Entry Point
============================

Runs the proof worker against the Redis job backend.

Version: 0.1.0
"""

import asyncio

from services.worker.worker import ProofWorker
from shared.config import settings
from shared.database.redis import RedisClient
from shared.jobs import RedisJobQueue, RedisResultStore, TransportError
from shared.logging import get_logger, setup_logging


# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="worker",
)

logger = get_logger(__name__)


async def serve() -> None:
    """Run the worker until it is cancelled or the backend fails."""
    logger.info(
        "worker_service_starting",
        environment=settings.environment.value,
        queue_backend="redis",
    )
    client = RedisClient.get_client()
    worker = ProofWorker(RedisJobQueue(client), RedisResultStore(client))
    try:
        await worker.run()
    except TransportError as e:
        logger.error("worker_transport_failed", error=str(e))
        raise
    finally:
        logger.info("worker_service_shutting_down")
        await RedisClient.close()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("worker_interrupted")
    except TransportError:
        raise SystemExit(1) from None


if __name__ == "__main__":
    run()
