"""
Main Application Entry Point.

This module builds the FastAPI application, configures middleware (CORS,
request logging) and exception handlers, and includes all API routers.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.core.database import Datastore
from taskboard.core.logging_config import get_logger, setup_logging

from .api import auth, bootstrap, dashboard, health, tasks
from .core import constant
from .core.config import Settings, settings as default_settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, datastore: Optional[Datastore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the ones loaded from the environment
        datastore: Pre-built datastore; when omitted one is created from
            ``settings`` at startup and disposed at shutdown

    Returns:
        The configured FastAPI application
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifespan events.

        Builds the datastore handle shared by all requests at startup and
        disposes its connection pool at shutdown.
        """
        logger.info("Starting up Taskboard Server...")
        owns_datastore = datastore is None
        app.state.datastore = datastore or Datastore.from_url(settings.resolved_database_url)
        if settings.init_db_on_startup:
            try:
                await app.state.datastore.create_tables()
            except Exception as e:
                logger.error(f"Database initialization failed: {e}", exc_info=True)

        yield

        logger.info("Shutting down Taskboard Server...")
        if owns_datastore:
            await app.state.datastore.dispose()

    app = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
        Taskboard API

        Personal task tracking: register, log in, manage your own tasks and
        view statistics about them.
        """,
        version=constant.API_VERSION,
        lifespan=lifespan,
    )

    if datastore is not None:
        app.state.datastore = datastore

    cors = settings.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    setup_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(bootstrap.router)
    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(dashboard.router)

    return app


setup_logging()
app = create_app()
