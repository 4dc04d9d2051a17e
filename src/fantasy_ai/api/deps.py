"""API dependency wiring."""

from functools import lru_cache

from ..service import AIService, create_ai_service


@lru_cache(maxsize=1)
def get_ai_service() -> AIService:
    """
    Create the AI service from settings (cached singleton).

    Service factory handles all construction logic - deps.py is just thin DI glue.
    """
    return create_ai_service()
