from fastapi import APIRouter

from app.api.routes_health import router as health_router
from app.api.routes_status import router as status_router
from app.api.routes_users import router as users_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(status_router, prefix="/api", tags=["status"])
api_router.include_router(users_router, prefix="/api/users", tags=["users"])
