"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, docqa.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docqa.api.deps.dependencies import get_service_cache
from docqa.boundary.db.connection import create_tables, dispose_engine, get_async_engine
from docqa.configs import get_settings
from docqa.observability import configure_logging
from docqa.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import documents_router, health_router, query_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    # Startup
    if settings.database.create_tables_on_startup:
        await create_tables(get_async_engine())
        logger.info("Database tables ready")
    logger.info(f"docqa API started (environment={settings.environment})")

    yield

    # Shutdown
    get_service_cache().clear()
    await dispose_engine()
    logger.info("Service cache cleared, database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="DocQA RAG API",
        description="Document ingestion and grounded question answering",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(query_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "docqa.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
