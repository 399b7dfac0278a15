"""Storefront FastAPI application.

Serves the identity, catalogue, cart and order routes from one process. All
database-bound handlers are plain ``def`` functions so FastAPI runs them on its
threadpool; each opens its own transaction against the shared ``Database``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api import product_router
from identity.api import router as identity_router
from ordering.api import cart_router, order_router
from shared.config import Settings, get_settings
from shared.database import Database
from shared.errors import InsufficientStockError, StorefrontError
from shared.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request."


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Storefront starting", env=settings.env, dialect=database.dialect)
        yield
        database.dispose()
        logger.info("Storefront stopped")

    app = FastAPI(
        title="Storefront API",
        description="E-commerce storefront: catalogue, cart and orders",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind request identifiers to every log line emitted while handling the request."""
        clear_context()
        add_context(
            request_id=request.headers.get("x-request-id") or uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_context()

    # -----------------------------------------------------------------------
    # Error mapping
    # -----------------------------------------------------------------------
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        if isinstance(exc, InsufficientStockError):
            return _error(exc.status_code, exc.message)
        if exc.status_code >= 500:
            logger.error("Request failed", error_type=type(exc).__name__, error=exc.message)
            return _error(exc.status_code, exc.public_message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error")
        return _error(500, "Internal server error.")

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "env": settings.env, "database": database.dialect})

    return app


app = create_app()
