"""
Application factory for the default variant.

Usage:
    from message_service.api.app import create_app

    app = create_app()                       # opens the store on startup
    app = create_app(repository=in_memory)   # skips the database entirely
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from message_service.api.handlers import install_error_handlers
from message_service.api.routes import router
from message_service.config import Settings, get_settings
from message_service.infrastructure.db_factory import init_store
from message_service.repositories.message_repo import MessageRepository, RecordRepository
from message_service.utils.logging import get_logger

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Own the connection pool for the lifetime of the application.

    Startup blocks until the store initializer succeeds; an injected
    repository bypasses the database.
    """
    if app.state.repository is not None:
        yield
        return

    pool = await run_in_threadpool(init_store, app.state.settings)
    app.state.repository = MessageRepository(pool)
    try:
        yield
    finally:
        app.state.repository = None
        pool.close()
        log.info("Connection pool closed")


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[RecordRepository] = None,
) -> FastAPI:
    """
    Build the database-backed application.

    Parameters
    ----------
    settings : Optional[Settings]
        Effective settings; defaults to the cached environment settings.
    repository : Optional[RecordRepository]
        Pre-built repository. When given, the lifespan does not touch the database.
    """
    app = FastAPI(
        title="Message Service",
        description="Upserts text values into PostgreSQL and reports how many are stored.",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.repository = repository
    install_error_handlers(app)
    app.include_router(router)
    return app


__all__ = ["create_app", "lifespan"]
