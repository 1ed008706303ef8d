# File: app/api/routes_health.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_app_settings, get_store
from app.core.config import Settings
from app.schemas.user import isoformat_utc
from app.services.results import Ok
from app.services.user_store import UserStore

router = APIRouter()


def utc_now_iso() -> str:
    return isoformat_utc(datetime.now(timezone.utc))


@router.get("/", summary="Service info")
def root(settings: Settings = Depends(get_app_settings)):
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "environment": settings.environment,
        "endpoints": {
            "health": "/health",
            "ready": "/ready",
            "status": "/api/status",
            "users": "/api/users",
            "user_by_id": "/api/users/:id",
        },
        "documentation": "See README.md for more details",
    }


@router.get("/health", summary="Liveness check")
def health(settings: Settings = Depends(get_app_settings)):
    """
    Always healthy while the process runs. Does not touch the database.
    """
    return {
        "status": "healthy",
        "timestamp": utc_now_iso(),
        "environment": settings.environment,
        "version": settings.VERSION,
    }


@router.get("/ready", summary="Readiness check")
def ready(store: UserStore = Depends(get_store)):
    result = store.ping()
    if isinstance(result, Ok):
        return {
            "status": "ready",
            "database": "connected",
            "timestamp": utc_now_iso(),
        }
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "not ready",
            "database": "disconnected",
            "error": result.message,
        },
    )
