"""Complaint AI Analyzer — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from complaint_ai.adapters.persistence.database import engine
from complaint_ai.application.errors import CallableError
from complaint_ai.config import settings
from complaint_ai.infrastructure.api.dependencies import get_llm
from complaint_ai.infrastructure.api.routes_complaints import router as complaints_router
from complaint_ai.infrastructure.api.routes_functions import (
    callable_error_handler,
    router as functions_router,
)
from complaint_ai.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)

    if not get_llm().has_credentials():
        logger.warning("OPENAI_API_KEY is not set; complaints will not be analyzed")

    yield

    await get_llm().close()
    await engine.dispose()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Complaint AI Analyzer",
        description="Complaint intake with AI summary, category, emotion and priority",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CallableError, callable_error_handler)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(complaints_router, prefix="/api")
    app.include_router(functions_router, prefix="/api")

    return app


app = create_app()
