"""FastAPI application entry point.

This module initializes the FastAPI application with CORS,
middleware, route registration and the per-application report store.

Run with: uvicorn billboard_reports.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from billboard_reports import __version__
from billboard_reports.api.endpoints import health
from billboard_reports.api.router import api_router
from billboard_reports.core.config import Settings, get_settings
from billboard_reports.core.logging import setup_logging
from billboard_reports.middleware.error_handler import (
    ErrorHandlerMiddleware,
    setup_exception_handlers,
)
from billboard_reports.services.content_analysis import ContentAnalyzer, build_content_analyzer
from billboard_reports.services.report_store import ReportStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("Starting Billboard Reports API...")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    yield

    # Reports are held in memory only and are dropped here
    logger.info(f"Shutting down Billboard Reports API ({app.state.report_store.count()} reports in memory)")


def create_application(
    settings: Optional[Settings] = None,
    store: Optional[ReportStore] = None,
    analyzer: Optional[ContentAnalyzer] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the cached environment settings.
        store: Report store shared by every request of this application.
        analyzer: Content analyzer for submitted photos; built from the
            settings when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Billboard Reports API",
        description=(
            "Citizens report billboard compliance violations with a photo, "
            "a location and a violation category. Reviewers list, filter "
            "and update reports and see their density on a heatmap."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.report_store = store if store is not None else ReportStore()
    app.state.content_analyzer = analyzer if analyzer is not None else build_content_analyzer(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handling middleware
    app.add_middleware(ErrorHandlerMiddleware)

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health.router)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


# Create the application instance
app = create_application()
