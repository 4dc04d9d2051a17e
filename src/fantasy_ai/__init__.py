"""Fantasy AI package exports."""

from .config import Settings, settings
from .domain import RequestRouter
from .service import AIService, create_ai_service

__all__ = [
    "AIService",
    "RequestRouter",
    "Settings",
    "create_ai_service",
    "settings",
]
