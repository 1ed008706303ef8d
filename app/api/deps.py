# File: app/api/deps.py

from fastapi import Request

from app.core.config import Settings
from app.services.user_store import UserStore


def get_store(request: Request) -> UserStore:
    """
    FastAPI dependency that provides the store created by the app factory.

    Usage in route functions:
        store: UserStore = Depends(get_store)
    """
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
