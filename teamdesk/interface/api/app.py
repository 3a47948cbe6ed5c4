"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logfire

from teamdesk.config import Settings
from teamdesk.domain.service import EmailDispatcher
from teamdesk.interface.api.routes import admin, health, team
from teamdesk.util.di.container import create_container, setup_di
from teamdesk.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use. Tests pass a container built with
            mocked components; the production container is built otherwise.
    """
    settings = Settings()
    if container is None:
        container = create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Let in-flight invitation emails finish before the loop goes away
        dispatcher = await container.get(EmailDispatcher)
        outcomes = await dispatcher.drain()
        if outcomes:
            logfire.info("Drained pending invitation emails", count=len(outcomes))
        await container.close()

    app_instance = FastAPI(
        title="Teamdesk API",
        description="Team invitations, verification and workspace maintenance",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Admin-Key",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(team.router)
    app_instance.include_router(admin.router)

    return app_instance
