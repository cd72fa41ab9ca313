"""FastAPI application factory for Little Bell."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from little_bell.common.config import get_settings
from little_bell.common.exceptions import (
    InvalidInputError,
    LittleBellError,
    NotFoundError,
    StorageFault,
)
from little_bell.common.logging import setup_logging
from little_bell.common.schemas import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    InvalidInputError: 400,
    NotFoundError: 404,
}


async def _handle_error(request: Request, exc: LittleBellError) -> JSONResponse:
    if isinstance(exc, StorageFault):
        logger.error("Storage fault on %s %s", request.method, request.url.path, exc_info=exc)
        body = ErrorResponse(error="Internal server error", code=exc.code)
        return JSONResponse(body.model_dump(), status_code=500)

    status = _STATUS_BY_ERROR.get(type(exc), 400)
    logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    body = ErrorResponse(error=exc.message, code=exc.code)
    return JSONResponse(body.model_dump(), status_code=status)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from little_bell.deps import get_db
        db = get_db()
        await db.initialize()
        logger.info("Little Bell ready at %s", settings.public_base_url)
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LittleBellError, _handle_error)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from little_bell.emails.router import router as email_router
    from little_bell.tracking.router import router as tracking_router
    from little_bell.stats.router import router as stats_router
    from little_bell.dashboard.router import router as dashboard_router

    app.include_router(email_router, tags=["emails"])
    app.include_router(tracking_router, tags=["tracking"])
    app.include_router(stats_router, tags=["stats"])
    app.include_router(dashboard_router, tags=["dashboard"])

    return app
