"""FastAPI application factory.

Main entry point for the sync server Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kosync import __version__
from kosync.config import load_app_config
from kosync.core.errors import StoreError, SyncError
from kosync.db.store import KeyValueStore, RedisStore
from kosync.web.routes import health_router, syncs_router, users_router

logger = structlog.get_logger(__name__)


async def sync_error_handler(request: Request, exc: SyncError) -> JSONResponse:
    """Map a SyncError to its status and client-facing message.

    Internal detail is logged for server errors and never sent to the client.
    """
    if exc.is_server_error:
        logger.error(
            "store_error" if isinstance(exc, StoreError) else "request_failed",
            method=request.method,
            path=request.url.path,
            error_type=type(exc).__name__,
            detail=exc.detail,
        )
    elif exc.status_code == 401:
        logger.debug("request_unauthorized", path=request.url.path, reason=exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(
    store: KeyValueStore | None = None,
    redis_url: str | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store to use. When omitted, a RedisStore is opened at startup
            and closed on shutdown.
        redis_url: Redis URL for that store (default: loaded configuration)

    Returns:
        Configured FastAPI app instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = store is None
        if owned:
            url = redis_url or load_app_config().redis_url
            app.state.store = RedisStore.from_url(url)
            logger.info("api_startup", redis_url=url)
        else:
            app.state.store = store
            logger.info("api_startup", store=type(store).__name__)
        try:
            yield
        finally:
            if owned:
                await app.state.store.close()
            logger.info("api_shutdown")

    app = FastAPI(
        title="KOSync Server",
        description="Reading progress synchronization for e-reader devices",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    # Available before startup too, for clients that skip the lifespan
    if store is not None:
        app.state.store = store

    app.add_exception_handler(SyncError, sync_error_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(syncs_router)

    return app


# Default app instance for uvicorn
app = create_app()
