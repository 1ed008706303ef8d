# app/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine

from app.api.api import api_router
from app.core.config import Settings, get_settings
from app.core.errors import install_error_handlers
from app.core.middleware import install_http_middleware
from app.db.session import create_db_engine
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    store: UserStore = app.state.store

    # Raises on failure, which aborts startup before any request is served
    store.bootstrap()

    logger.info("Server running on port %s", settings.app_port)
    logger.info("Environment: %s", settings.environment)
    logger.info("Health check: http://localhost:%s/health", settings.app_port)
    logger.info("API status: http://localhost:%s/api/status", settings.app_port)
    try:
        yield
    finally:
        logger.info("Shutting down gracefully")
        store.close()


def create_application(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    settings = settings or get_settings()
    store = UserStore(engine if engine is not None else create_db_engine(settings))

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # ---------- MIDDLEWARE ----------
    install_http_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    install_error_handlers(app, development_mode=settings.development_mode)

    # ---------- STATIC FILES ----------
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # ---------- ROUTERS ----------
    app.include_router(api_router)

    return app


app = create_application()
