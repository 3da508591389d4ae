"""FastAPI application entry point.

Message API - messages, reply threads and feeds.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator, Awaitable, Callable
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from message_api.routes import api_router
from message_api.schemas import ErrorDetail, ErrorResponse
from message_api.settings import get_settings
from message_api.stores.auditing import acting_as
from message_api.stores.locks import LockTimeoutError
from message_api.stores.postgres import StoreUnavailableError, close_db, create_tables, init_db, ping_db
from message_api.stores.redis import close_redis, init_redis

logger = logging.getLogger("uvicorn.error")


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    settings = get_settings()

    try:
        await init_db()
        await ping_db()
        logger.info("Database connected")
        if settings.auto_create_tables:
            await create_tables()
            logger.info("Database tables ensured")
    except Exception:
        logger.exception("Database init failed")

    if settings.reply_lock_backend == "redis":
        try:
            await init_redis()
        except Exception:
            logger.exception("Redis init failed")

    yield

    # Shutdown
    await close_redis()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Messages, reply threads and feeds",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Record the request's actor on every write it makes
    @app.middleware("http")
    async def audit_actor(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        actor = request.headers.get(settings.actor_header) or settings.default_actor
        with acting_as(actor):
            return await call_next(request)

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
        logger.error("Store unavailable: %s", exc)
        return _error(503, "STORE_UNAVAILABLE", str(exc) if settings.debug else "Document store unavailable")

    @app.exception_handler(LockTimeoutError)
    async def lock_timeout_handler(request: Request, exc: LockTimeoutError) -> JSONResponse:
        return _error(503, "REPLY_LOCK_TIMEOUT", "Parent message is busy, retry later")

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        return _error(500, "INTERNAL_ERROR", str(exc) if settings.debug else "Internal server error")

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "message_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
