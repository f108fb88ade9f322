"""
savings_api.api.app

FastAPI app factory for the Savings Goals service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, identity provider client).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from savings_api import __version__
from savings_api.api.errors import register_exception_handlers
from savings_api.api.routers.auth import router as auth_router
from savings_api.api.routers.goals import router as goals_router
from savings_api.api.routers.health import router as health_router
from savings_api.api.routers.users import router as users_router
from savings_api.auth.identity_provider import IdentityProviderClient, build_identity_provider
from savings_api.auth.verifiers import build_token_verifier
from savings_api.db.init_db import init_db
from savings_api.db.session import create_engine, create_sessionmaker
from savings_api.observability.logging import configure_logging, get_logger
from savings_api.observability.middleware import RequestContextMiddleware
from savings_api.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    identity_provider: IdentityProviderClient | None = None,
) -> FastAPI:
    """
    `identity_provider` overrides the client built from settings (tests pass one backed by
    `httpx.MockTransport`). It is only consulted when `auth_strategy == "delegated"`.
    """

    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, auth_strategy=settings.auth_strategy)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            await init_db(engine)

        owned_http: httpx.AsyncClient | None = None
        idp = identity_provider
        if settings.auth_strategy == "delegated" and idp is None:
            idp, owned_http = build_identity_provider(settings)
        app.state.identity_provider = idp
        app.state.token_verifier = build_token_verifier(settings, idp)

        try:
            yield
        finally:
            if owned_http is not None:
                await owned_http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Savings Goals API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(goals_router)

    return app
