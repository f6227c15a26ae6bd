"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scribe.config import Settings
from scribe.interface.api.routes import admin_comments, comments, health
from scribe.util.di.container import create_container, setup_di
from scribe.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container is built
            when omitted (tests pass one with mocked components)
    """
    settings = Settings()

    # Mail relay calls go through httpx
    instrument_httpx()

    app_instance = FastAPI(
        title="NovaScribe Comments API",
        description="Comment submission, anti-spam and moderation API for the NovaScribe blog",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.frontend_url,
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type", "Retry-After"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(admin_comments.router)

    return app_instance
