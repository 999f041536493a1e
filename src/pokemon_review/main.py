"""
Application factory.

Run with:
    uvicorn pokemon_review.main:app
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from pokemon_review.api.v1 import api_router, register_exception_handlers
from pokemon_review.config import Settings, get_settings
from pokemon_review.core.logging import RequestIDMiddleware, setup_logging
from pokemon_review.database.session import create_all, get_engine
from pokemon_review.utils.logging import get_project_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.DB_CREATE_ALL:
            await create_all()
            logger.info("database.create_all.done")
        logger.info("app.startup", extra={"env": settings.ENV})
        yield
        # only dispose an engine that was actually created
        if get_engine.cache_info().currsize:
            await get_engine().dispose()
        logger.info("app.shutdown")

    app = FastAPI(
        title=settings.APP_NAME,
        version=get_project_version(),
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    register_exception_handlers(app)

    return app


app = create_app()
