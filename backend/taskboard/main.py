"""FastAPI application: routers, middleware, error handling and lifecycle."""

from __future__ import annotations

import asyncio
import signal
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from taskboard import __version__
from taskboard.api import auth as auth_api
from taskboard.api import projects as projects_api
from taskboard.api import tasks as tasks_api
from taskboard.core.config import DEFAULT_JWT_SECRET, settings
from taskboard.core.error_handling import install_error_handling
from taskboard.core.logging import configure_logging, get_logger
from taskboard.core.time import utcnow
from taskboard.db.session import close_db, init_db
from taskboard.schemas.common import HealthRead

configure_logging(settings.log_level)
logger = get_logger(__name__)


def _handle_unhandled_async_error(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    # An error escaping a background task leaves the process in an unknown state;
    # log it and shut down rather than keep serving.
    exc = context.get("exception")
    logger.critical(
        "app.unhandled_async_error message=%s error=%s",
        context.get("message"),
        exc,
        exc_info=exc,
    )
    loop.call_soon(signal.raise_signal, signal.SIGTERM)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    if settings.is_production and settings.jwt_secret == DEFAULT_JWT_SECRET:
        msg = "JWT_SECRET must be set in production"
        raise RuntimeError(msg)
    try:
        await init_db()
    except Exception:
        logger.critical("app.startup_failed reason=database_unreachable", exc_info=True)
        raise
    asyncio.get_running_loop().set_exception_handler(_handle_unhandled_async_error)
    logger.info("app.started environment=%s", settings.environment)
    try:
        yield
    finally:
        await close_db()
        logger.info("app.stopped")


app = FastAPI(title="Task Management API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list or ["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.is_development:

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        logger.info("http.request method=%s path=%s", request.method, request.url.path)
        return await call_next(request)


install_error_handling(app)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_api.router)
api_router.include_router(projects_api.router)
api_router.include_router(tasks_api.router)


@api_router.get("/health", response_model=HealthRead)
def health() -> HealthRead:
    return HealthRead(timestamp=utcnow())


app.include_router(api_router)


@app.get("/")
def root() -> dict[str, object]:
    return {
        "success": True,
        "message": "Welcome to Task Management API",
        "version": __version__,
        "endpoints": {
            "auth": "/api/auth",
            "projects": "/api/projects",
            "tasks": "/api/tasks",
            "health": "/api/health",
        },
    }
