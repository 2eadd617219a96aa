"""
FastAPI main application for the library catalog service.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status

from api.responses import error_response
from api.routes import build_router
from catalog.database import BookRepository
from catalog.exceptions import CatalogError, RepositoryError
from utilities.config import config

# Setup logging
logger = structlog.get_logger(__name__)


def create_repository() -> BookRepository:
    """Create the book repository from process configuration."""
    return BookRepository(
        connection_url=config.get_mongodb_url(),
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection,
        timeout_ms=config.mongodb_timeout_ms
    )


def create_app(repository: Optional[BookRepository] = None) -> FastAPI:
    """
    Create the FastAPI application around a single shared repository.

    Args:
        repository: Repository to serve; built from configuration when omitted

    Returns:
        Configured FastAPI application
    """
    if repository is None:
        repository = create_repository()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting library catalog API")

        try:
            await repository.connect()
            logger.info("Database connection established")
        except Exception as e:
            logger.error("Failed to connect to database", error=str(e))
            raise

        yield

        logger.info("Shutting down library catalog API")
        await repository.disconnect()

    app = FastAPI(
        title="Library Catalog API",
        description="""
        A REST API for storing, retrieving, replacing and deleting book records.

        ## Errors

        Every error is returned as `{"error": "<message>"}`.
        """,
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.repository = repository

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with its outcome and duration."""
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2)
        )
        return response

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request: Request, exc: CatalogError):
        """Handle catalog errors."""
        if isinstance(exc, RepositoryError):
            logger.error("Repository failure", error=exc.message, path=request.url.path)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    app.include_router(build_router(repository))

    return app


app = create_app()
