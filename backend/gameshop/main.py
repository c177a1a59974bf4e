"""GameShop API: FastAPI application entry point.

Invariants:
    - Routers are registered explicitly, health first
    - The store is created in lifespan startup and disposed on shutdown
    - CORS origins come from settings; credentials are allowed because the
      access token travels in a cookie
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gameshop.api.error_handlers import register_error_handlers
from gameshop.api.routes import accounts, characters, economy, health
from gameshop.api.routes.health import SERVICE_VERSION
from gameshop.config import Settings, get_settings
from gameshop.infrastructure.database import init_db
from gameshop.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        isolation_level=settings.database_isolation_level,
    )
    logger.info("GameShop API started")
    try:
        yield
    finally:
        await store.dispose()
        logger.info("GameShop API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="GameShop API", version=SERVICE_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for module in (health, accounts, characters, economy):
        app.include_router(module.router)
    register_error_handlers(app)
    return app


app = create_app()
