from .health import HealthResponse, ProviderStatusResponse, ToolsResponse

__all__ = [
    "HealthResponse",
    "ProviderStatusResponse",
    "ToolsResponse",
]
