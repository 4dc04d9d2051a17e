"""Fantasy AI Service

FastAPI application hosting the provider-orchestration layer. The analysis
features are called in-process through ``fantasy_ai.service.analysts``; the
HTTP surface here is health and tool discovery only.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .api.deps import get_ai_service
from .api.routers import health_router
from .config import settings
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown logic"""
    configure_logging(settings.log_level, settings.environment)
    logger.info("app_starting", extra={"app": settings.app_name, "version": settings.app_version})
    service = get_ai_service()
    await service.startup()
    yield
    await service.shutdown()
    get_ai_service.cache_clear()
    logger.info("app_stopped")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.environment == "development",
    lifespan=lifespan,
)

# Add CORS middleware
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=settings.cors_credentials,
        allow_methods=settings.cors_methods.split(","),
        allow_headers=settings.cors_headers.split(","),
    )

app.include_router(health_router)


@app.get("/")
async def root() -> RedirectResponse:
    """Redirect root to API docs"""
    return RedirectResponse(url="/docs")
