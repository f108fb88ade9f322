"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file, driven in-process over ASGI.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from savings_api.api.app import create_app
from savings_api.settings import Settings


@pytest.fixture
def settings_factory(tmp_path: Path) -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        values = {
            "env": "test",
            "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            "allow_admin_signup": True,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest_asyncio.fixture
async def app(settings_factory: Callable[..., Settings]) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings_factory())
    # httpx's ASGITransport does not run lifespan events; drive them explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def signup(client: httpx.AsyncClient) -> Callable[..., Awaitable[dict[str, str]]]:
    """Register + log in; returns the Authorization header for that user."""

    async def _signup(username: str, password: str = "s3cret", role: str = "user") -> dict[str, str]:
        r = await client.post(
            "/register", json={"username": username, "password": password, "role": role}
        )
        assert r.status_code == 201, r.text
        r = await client.post("/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _signup
