"""Health check router

Provides health check endpoints for monitoring and service discovery.

Endpoints:
- GET /health: Service health status and metadata
- GET /health/providers: Live probe of every backend and the tool service
- GET /tools: Tool names offered to backends and where the catalog came from

Health Check Philosophy:
- /health never touches a backend, so monitors stay cheap
- /health/providers is the deep check and runs probes concurrently
"""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from ...config import settings
from ...service import AIService
from ..contracts import HealthResponse, ProviderStatusResponse, ToolsResponse
from ..deps import get_ai_service

router = APIRouter(tags=["health"])

AIServiceDep = Annotated[AIService, Depends(get_ai_service)]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """API health check"""
    return HealthResponse(status="healthy", service=settings.app_name, version=settings.app_version)


@router.get("/health/providers", response_model=ProviderStatusResponse)
async def provider_status(service: AIServiceDep) -> ProviderStatusResponse:
    backends, tool_service = await asyncio.gather(
        service.router.backend_status(),
        service.router.tool_service_status(),
    )
    default = service.router.default_backend
    return ProviderStatusResponse(
        providers={str(backend_id): healthy for backend_id, healthy in backends.items()},
        default_provider=str(default) if default else None,
        tool_service=tool_service,
    )


@router.get("/tools", response_model=ToolsResponse)
async def list_tools(service: AIServiceDep) -> ToolsResponse:
    catalog = service.router.catalog
    return ToolsResponse(source=catalog.source, tools=list(catalog.names))
