"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from payrail.api.routes import bank_files, health
from payrail.core.config import AppSettings
from payrail.core.logging import configure_logging
from payrail.services.cipher import check_cipher_config


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Load settings, configure logging, refuse an unsafe cipher secret."""
        app_settings = settings or AppSettings()
        configure_logging(settings=app_settings)
        check_cipher_config(app_settings)
        app.state.settings = app_settings
        yield

    app = FastAPI(
        title="Payrail Bank File Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(bank_files.router)
    return app
