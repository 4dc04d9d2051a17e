"""Health check response models"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """API health check response"""

    status: str
    service: str
    version: str


class ProviderStatusResponse(BaseModel):
    """Per-backend health plus the tool service"""

    providers: dict[str, bool]
    default_provider: str | None
    tool_service: bool


class ToolsResponse(BaseModel):
    """Tools currently offered to backends"""

    source: str
    tools: list[str]
