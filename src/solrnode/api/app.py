"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from solrnode import __version__
from solrnode.api.deps import set_settings
from solrnode.api.v1.router import router as v1_router
from solrnode.config.settings import Settings
from solrnode.exceptions import (
    ConfigurationError,
    ParameterError,
    RemoteCallError,
    SolrNodeError,
)
from solrnode.observability.logging import setup_logging

logger = logging.getLogger(__name__)

_ERROR_STATUS: list[tuple[type[SolrNodeError], int]] = [
    (ParameterError, 422),
    (ConfigurationError, 400),
    (RemoteCallError, 502),
]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        yaml_path = Path("solrnode-config.yaml")
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    # Endpoints resolve settings through deps; set eagerly so TestClient
    # without a lifespan context still works.
    set_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        set_settings(settings)
        app.state.settings = settings
        logger.info(
            "solrnode v%s ready on port %d (default core: %r)",
            __version__,
            settings.server.port,
            settings.solr.credentials.core,
        )
        yield
        set_settings(None)
        logger.info("solrnode shutdown complete")

    app = FastAPI(
        title="solrnode",
        description="Run Apache Solr search, update and delete operations over batches of workflow items.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SolrNodeError)
    async def solrnode_error_handler(request: Request, exc: SolrNodeError) -> JSONResponse:
        """Surface a failed run's error message to the caller."""
        return JSONResponse(
            status_code=error_status(exc),
            content={"detail": str(exc), "error_type": type(exc).__name__},
        )

    app.include_router(v1_router, prefix="/v1")

    return app


def error_status(exc: SolrNodeError) -> int:
    for error_type, status in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500
