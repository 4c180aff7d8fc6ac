"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, prometheus_client, ragchat.api.routers, ragchat.observability, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from ragchat import __version__
from ragchat.api.deps.dependencies import ServiceCache
from ragchat.api.error_handlers import register_exception_handlers
from ragchat.observability.logger import configure_logging
from ragchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    documents_router,
    health_router,
    messages_router,
    sessions_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts the indexing worker pool on startup and stops it on shutdown.
    """
    cache: ServiceCache = app.state.service_cache
    configure_logging(cache.settings.log_level)
    logger = logging.getLogger("uvicorn")

    await cache.pool.start()
    logger.info("Indexing worker pool started")

    yield

    await cache.pool.stop()
    logger.info("Indexing worker pool stopped")


def create_app(service_cache: ServiceCache | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        service_cache: Collaborator container (built from settings when None)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="RAG Chat API",
        description="Session chat with retrieval over uploaded documents",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service_cache = service_cache or ServiceCache()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    # Outermost, so request log lines carry the correlation ID
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(messages_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")

    app.mount("/metrics", make_asgi_app())

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "ragchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
