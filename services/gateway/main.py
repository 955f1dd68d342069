"""
Gateway Service - Main Application
==================================

FastAPI application accepting proof jobs and serving their results.

Version: 0.1.0
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.gateway.jobs import StatusEndpoint, SubmissionGateway
from services.gateway.routes import verifications
from services.worker.worker import ProofWorker
from shared.config import JobBackend, settings
from shared.database.redis import RedisClient
from shared.jobs import (
    InMemoryJobQueue,
    InMemoryResultStore,
    JobQueue,
    RedisJobQueue,
    RedisResultStore,
    ResultDecodeError,
    ResultStore,
    TransportError,
)
from shared.logging import get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse


# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="gateway",
)

logger = get_logger(__name__)


def _install_components(app: FastAPI, queue: JobQueue, store: ResultStore) -> None:
    app.state.gateway = SubmissionGateway(queue)
    app.state.status_endpoint = StatusEndpoint(store)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "gateway_service_starting",
        environment=settings.environment.value,
        port=settings.ports.gateway,
        backend=settings.jobs.backend.value,
    )

    if getattr(app.state, "gateway", None) is not None:
        # Components were injected by the caller
        yield
        return

    worker_task: asyncio.Task[int] | None = None

    # Startup
    if settings.jobs.backend == JobBackend.MEMORY:
        queue: JobQueue = InMemoryJobQueue()
        store: ResultStore = InMemoryResultStore()
        worker_task = asyncio.create_task(ProofWorker(queue, store).run())
        logger.info("in_process_worker_started")
    else:
        client = RedisClient.get_client()
        queue = RedisJobQueue(client)
        store = RedisResultStore(client)
        app.state.redis_backed = True
        logger.info("redis_connected")

    _install_components(app, queue, store)

    yield

    # Shutdown
    logger.info("gateway_service_shutting_down")
    if worker_task is not None:
        worker_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker_task
    await RedisClient.close()


def create_app(
    queue: JobQueue | None = None,
    store: ResultStore | None = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        queue: Job queue to submit to (built from settings at startup if omitted)
        store: Result store to read from (built from settings at startup if omitted)
    """
    app = FastAPI(
        title="Scoreproof Gateway",
        description="Asynchronous zero-knowledge score threshold proofs",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.redis_backed = False

    if queue is not None and store is not None:
        _install_components(app, queue, store)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # Health Check Endpoints
    # ========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """
        Service health check.

        Returns health status of the service and its job backend.
        """
        components: dict[str, dict[str, Any]] = {}

        if app.state.redis_backed:
            components["redis"] = await RedisClient.health_check()
        else:
            components["jobs"] = {"status": "healthy", "backend": JobBackend.MEMORY.value}

        all_healthy = all(c.get("status") == "healthy" for c in components.values())

        return HealthResponse(
            status="healthy" if all_healthy else "degraded",
            service="gateway",
            version="0.1.0",
            components=components,
        )

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "Scoreproof Gateway",
            "version": "0.1.0",
            "docs": "/docs",
        }

    # ========================================================================
    # Include Routers
    # ========================================================================

    app.include_router(
        verifications.router,
        prefix="/v1/verifications",
        tags=["Verifications"],
    )

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
        )

    @app.exception_handler(TransportError)
    @app.exception_handler(ResultDecodeError)
    async def backend_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Queue or store failures are server errors, never 'not found'."""
        logger.error(
            "job_backend_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal Server Error").model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal Server Error").model_dump(exclude_none=True),
        )

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "services.gateway.main:app",
        host="0.0.0.0",
        port=settings.ports.gateway,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    run()
