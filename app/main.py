# app/main.py (async version)

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.database import create_tables
from app.adapters.outbound.persistence.seeds import run_all_seeds
from app.adapters.outbound.cache.store import create_store
from app.application.ports.outbound import IKeyValueStore

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    # Startup
    logger.info("Application starting up...")

    # Create database tables if they don't exist
    await create_tables()
    await run_all_seeds()

    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = await create_store()

    yield

    # Shutdown
    logger.info("Application shutting down...")
    if owns_store:
        await app.state.store.close()


def create_app(store: Optional[IKeyValueStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        store: Key-value store shared by rate limiters and the response cache.
            When omitted one is created at startup from STORE_BACKEND.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API with JWT authentication and role-based access control",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.store = store

    # Middlewares
    from app.shared.middleware import (
        AsyncExceptionMiddleware,
        AsyncRequestLoggingMiddleware,
        AsyncTimeoutMiddleware,
        register_exception_handlers,
    )

    register_exception_handlers(app)

    app.add_middleware(AsyncTimeoutMiddleware)
    app.add_middleware(AsyncRequestLoggingMiddleware)
    app.add_middleware(AsyncExceptionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "X-RateLimit-Remaining", "Retry-After"],
    )

    # Routers
    from app.adapters.inbound.api.v1.router import api_router as api_v1_router

    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "success": True,
            "message": f"{settings.APP_NAME} Server",
            "version": app.version,
            "documentation": "/docs",
        }

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"success": True, "message": "Server is running"}

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        # Validation errors are answered with 400, never 422
        for schema in ("HTTPValidationError", "ValidationError"):
            openapi_schema.get("components", {}).get("schemas", {}).pop(schema, None)

        for path in openapi_schema.get("paths", {}).values():
            for op in path.values():
                op.get("responses", {}).pop("422", None)

        openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }

        app.openapi_schema = openapi_schema
        return openapi_schema

    app.openapi = custom_openapi

    return app


# Create FastAPI instance
app = create_app()
