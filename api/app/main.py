# main.py

"""FastAPI application for outlet menus and POS order taking."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.asyncio import from_url
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import LockBackend, get_settings

from .db import dispose_engines
from .domain import (
    ConcurrentUpdateError,
    InactiveProductError,
    InvalidPaymentError,
    LockTimeoutError,
    NotFoundError,
    OrderNotOpenError,
    PosError,
    TableOccupiedError,
)
from .middlewares.logging import LoggingMiddleware, tenant_from_path
from .middlewares.request_id import RequestIdMiddleware
from .obs import configure_logging
from .routes_menu import router as menu_router
from .routes_pos import router as pos_router
from .services import LocalOrderLocks, build_locks
from .utils.responses import err

logger = logging.getLogger("api")

ERROR_STATUS: dict[type[PosError], int] = {
    NotFoundError: 404,
    OrderNotOpenError: 409,
    InactiveProductError: 409,
    TableOccupiedError: 409,
    ConcurrentUpdateError: 409,
    LockTimeoutError: 423,
    InvalidPaymentError: 422,
}


def status_for(exc: PosError) -> int:
    for kind in type(exc).__mro__:
        if kind in ERROR_STATUS:
            return ERROR_STATUS[kind]
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.order_lock_backend is LockBackend.REDIS:
        redis = getattr(app.state, "redis", None)
        if redis is None:
            redis = from_url(settings.redis_url)
            app.state.redis = redis
        app.state.order_locks = build_locks(settings, redis)
    try:
        yield
    finally:
        await dispose_engines()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level.upper())

    app = FastAPI(title="Outlet POS", lifespan=lifespan)
    # One registry per app; the redis backend is swapped in at startup.
    app.state.order_locks = LocalOrderLocks(settings.order_lock_wait_secs)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(menu_router)
    app.include_router(pos_router)

    @app.exception_handler(PosError)
    async def pos_error_handler(request: Request, exc: PosError):
        status = status_for(exc)
        logger.info(
            exc.message,
            extra={
                "status": status,
                "route": request.url.path,
                "tenant": tenant_from_path(request.url.path),
            },
        )
        return JSONResponse(err(exc.code, exc.message), status_code=status)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            exc.detail,
            extra={
                "status": exc.status_code,
                "route": request.url.path,
                "tenant": tenant_from_path(request.url.path),
            },
        )
        return JSONResponse(
            err(exc.status_code, str(exc.detail)), status_code=exc.status_code
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            err("VALIDATION", "Invalid request", details={"errors": exc.errors()}),
            status_code=422,
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_error",
            extra={
                "status": 500,
                "route": request.url.path,
                "tenant": tenant_from_path(request.url.path),
            },
        )
        return JSONResponse(err(500, "Internal Server Error"), status_code=500)

    @app.get("/health")
    async def health() -> dict:
        return {"ok": True}

    return app


app = create_app()
