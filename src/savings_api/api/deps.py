"""
savings_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the shared auth clients.
- Encapsulate app.state access patterns (sessionmaker, identity provider, token verifier).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from savings_api.auth.identity_provider import IdentityProviderClient
from savings_api.auth.verifiers import TokenVerifier
from savings_api.services.accounts import AccountService
from savings_api.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app is built for one Settings instance; handlers read that one, not the env.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created once in the app lifespan (see `savings_api.api.app.create_app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def token_verifier_dep(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier  # type: ignore[attr-defined]


def identity_provider_dep(request: Request) -> IdentityProviderClient | None:
    return request.app.state.identity_provider  # type: ignore[attr-defined]


def account_service_dep(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    identity_provider: IdentityProviderClient | None = Depends(identity_provider_dep),
) -> AccountService:
    return AccountService(session=session, settings=settings, identity_provider=identity_provider)
