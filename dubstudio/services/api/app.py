# dubstudio/services/api/app.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import get_settings
from dubstudio.database.core.main import Database
from dubstudio.domain.ports.images import ImageStorePort
from dubstudio.services.api.errors import install_error_handlers
from dubstudio.services.api.routers import (
    artists, categories, characters, health, messages, profile, projects, uploads,
)
from dubstudio.services.images.factory import build_image_store

logger = get_logger(__name__)


def create_app(
    database: Optional[Database] = None,
    image_store: Optional[ImageStorePort] = None,
) -> FastAPI:
    """
    Composition root. The database and image store are built here unless
    the caller (tests, scripts) hands them in.

        uvicorn --factory dubstudio.services.api.app:create_app
    """
    cfg = get_settings()
    dev = cfg.app_env.lower() == "development"
    db = database or Database()
    store = image_store or build_image_store(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (%s)", cfg.app_name, cfg.app_env)
        yield
        db.dispose()

    app = FastAPI(
        title="Dubstudio API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.image_store = store

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    install_error_handlers(app)

    # Routers (uploads before projects: /cover-image must not be read as a slug)
    app.include_router(uploads.router)
    app.include_router(projects.router)
    app.include_router(characters.router)
    app.include_router(categories.router)
    app.include_router(artists.router)
    app.include_router(profile.router)
    app.include_router(messages.router)
    app.include_router(health.router)
    return app
