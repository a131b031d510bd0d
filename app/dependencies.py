from fastapi import Request

from app.services.providers.base import ContentProvider
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_content_provider(request: Request) -> ContentProvider:
    return request.app.state.provider
