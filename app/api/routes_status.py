# File: app/api/routes_status.py

from fastapi import APIRouter, Depends

from app.api.deps import get_app_settings, get_store
from app.api.routes_health import utc_now_iso
from app.core.config import Settings
from app.core.errors import StoreError
from app.services.results import Ok
from app.services.user_store import UserStore

router = APIRouter()


@router.get("/status", summary="Database status")
def database_status(
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    result = store.database_status()
    if not isinstance(result, Ok):
        raise StoreError(
            result.message,
            error="Database connection failed",
            extra={"status": "error"},
        )

    db_status = result.value.model_dump(mode="json")
    return {
        "status": "Database connected",
        "database_time": db_status["database_time"],
        "database_version": db_status["database_version"],
        "app_time": utc_now_iso(),
        "environment": settings.environment,
    }
