"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - a lifespan handler that builds the shared resolver
  - CORS middleware
  - global exception handlers (ValueError → 400/404/409)
  - API routes under ``/api/v1`` and a ``/health`` probe

``cli()`` is the ``assignment-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from assignment_db.engine import dispose_engine, get_engine
from assignment_questions.identifiers import UuidIdGenerator
from assignment_questions.resolver import QuestionGraphResolver

from assignment_server.config import ServerSettings, load_settings
from assignment_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from assignment_server.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the resolver at startup; dispose the DB pool on shutdown."""
    app.state.resolver = QuestionGraphResolver(UuidIdGenerator())
    logger.info("Question resolver ready")

    yield

    await dispose_engine()
    logger.info("Database engine disposed")


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Assignment API Server",
        description="Create and edit assignments with resolved question lists",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": "database unavailable"}

    register_routes(app)

    return app


# Module-level ASGI export (uvicorn assignment_server.app:app)
app = create_app()


def cli() -> None:
    """Console-script entry point: ``assignment-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "assignment_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
