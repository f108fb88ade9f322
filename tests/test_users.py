"""
tests.test_users

Admin user management and the account delete cascade.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.exc import OperationalError

from savings_api.db.repositories.goals import GoalRepo
from savings_api.db.repositories.users import UserRepo

GOAL = {"name": "Trip", "targetAmount": 1200, "category": "travel"}


@pytest.mark.asyncio
async def test_list_users_requires_admin(client: httpx.AsyncClient, signup) -> None:
    user = await signup("alice")
    r = await client.get("/users", headers=user)
    assert r.status_code == 403

    r = await client.delete("/users/whatever", headers=user)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_list_users(client: httpx.AsyncClient, signup) -> None:
    admin = await signup("root", role="admin")
    await signup("alice")

    r = await client.get("/users", headers=admin)
    assert r.status_code == 200
    body = r.json()
    assert body["totalUsers"] == 2
    assert sorted(u["username"] for u in body["users"]) == ["alice", "root"]
    assert all("passwordHash" not in u for u in body["users"])


@pytest.mark.asyncio
async def test_delete_user_cascades(app: FastAPI, client: httpx.AsyncClient, signup) -> None:
    admin = await signup("root", role="admin")
    alice = await signup("alice")
    bob = await signup("bob")
    alice_id = (await client.get("/verify", headers=alice)).json()["user"]["id"]

    await client.post("/goals", json=GOAL, headers=alice)
    await client.post("/goals", json={**GOAL, "name": "Laptop"}, headers=alice)
    await client.post("/goals", json=GOAL, headers=bob)

    r = await client.delete(f"/users/{alice_id}", headers=admin)
    assert r.status_code == 200
    assert r.json()["deletedGoals"] == 2

    async with app.state.sessionmaker() as session:
        assert await GoalRepo(session).list_for_user(alice_id) == []
        assert await UserRepo(session).get(alice_id) is None

    # Other users are untouched.
    assert len((await client.get("/goals", headers=bob)).json()) == 1
    r = await client.get("/users", headers=admin)
    assert r.json()["totalUsers"] == 2


@pytest.mark.asyncio
async def test_delete_unknown_user(client: httpx.AsyncClient, signup) -> None:
    admin = await signup("root", role="admin")
    r = await client.delete("/users/does-not-exist", headers=admin)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_failed_user_delete_keeps_goals(
    app: FastAPI, client: httpx.AsyncClient, signup, monkeypatch: pytest.MonkeyPatch
) -> None:
    admin = await signup("root", role="admin")
    alice = await signup("alice")
    alice_id = (await client.get("/verify", headers=alice)).json()["user"]["id"]
    await client.post("/goals", json=GOAL, headers=alice)

    async def failing_delete(self, user_id: str) -> int:
        raise OperationalError("DELETE FROM users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(UserRepo, "delete", failing_delete)

    r = await client.delete(f"/users/{alice_id}", headers=admin)
    assert r.status_code == 500

    # The goal delete ran first in the same transaction and was rolled back with it.
    async with app.state.sessionmaker() as session:
        assert len(await GoalRepo(session).list_for_user(alice_id)) == 1
        assert await UserRepo(session).get(alice_id) is not None

    monkeypatch.undo()
    assert len((await client.get("/goals", headers=alice)).json()) == 1
