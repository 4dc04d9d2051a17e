"""Service layer exports."""

from .ai_service import AIService, create_ai_service, create_backends
from .analysts import (
    LineupAnalyst,
    LineupRequest,
    StartSitAnalyst,
    StartSitRequest,
    TradeAnalyst,
    TradeRequest,
    WaiverWireAnalyst,
    WaiverWireRequest,
)
from .storage import CacheStoreConfig, StorageService, create_storage_service

__all__ = [
    "AIService",
    "CacheStoreConfig",
    "LineupAnalyst",
    "LineupRequest",
    "StartSitAnalyst",
    "StartSitRequest",
    "StorageService",
    "TradeAnalyst",
    "TradeRequest",
    "WaiverWireAnalyst",
    "WaiverWireRequest",
    "create_ai_service",
    "create_backends",
    "create_storage_service",
]
