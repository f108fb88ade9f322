"""
tests.test_goals

Goal CRUD, scoped to the authenticated caller.
"""

from __future__ import annotations

import uuid

import httpx
import pytest

GOAL = {
    "name": "Emergency fund",
    "targetAmount": 5000,
    "savedAmount": 250.5,
    "category": "safety",
    "targetDate": "2027-06-30",
}


@pytest.mark.asyncio
async def test_create_then_list(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")

    r = await client.post("/goals", json=GOAL, headers=headers)
    assert r.status_code == 201
    created = r.json()
    assert uuid.UUID(created["id"])
    assert created["createdAt"] and created["updatedAt"]
    assert created["targetAmount"] == 5000
    assert created["savedAmount"] == 250.5
    assert created["targetDate"] == "2027-06-30"

    r = await client.get("/goals", headers=headers)
    assert r.status_code == 200
    goals = r.json()
    assert [g["id"] for g in goals] == [created["id"]]
    assert goals[0]["userId"] == created["userId"]


@pytest.mark.asyncio
async def test_create_accepts_snake_case_and_defaults(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")

    r = await client.post(
        "/goals",
        json={"name": "Bike", "target_amount": 800, "category": "fun"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["savedAmount"] == 0
    assert r.json()["targetDate"] is None


@pytest.mark.asyncio
async def test_create_validation(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")

    r = await client.post("/goals", json={"name": "No amount"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Missing required fields"

    r = await client.post("/goals", json={**GOAL, "targetAmount": -1}, headers=headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_lists_are_per_user(client: httpx.AsyncClient, signup) -> None:
    alice = await signup("alice")
    bob = await signup("bob")

    await client.post("/goals", json=GOAL, headers=alice)
    await client.post("/goals", json={**GOAL, "name": "Car"}, headers=bob)

    r = await client.get("/goals", headers=alice)
    assert [g["name"] for g in r.json()] == ["Emergency fund"]
    r = await client.get("/goals", headers=bob)
    assert [g["name"] for g in r.json()] == ["Car"]


@pytest.mark.asyncio
async def test_replace(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")
    goal_id = (await client.post("/goals", json=GOAL, headers=headers)).json()["id"]

    update = {"name": "House", "targetAmount": 90000, "savedAmount": 100, "category": "home"}
    r = await client.put(f"/goals/{goal_id}", json=update, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == goal_id
    assert body["name"] == "House"
    assert body["targetAmount"] == 90000
    assert body["targetDate"] is None


@pytest.mark.asyncio
async def test_patch_saved_amount(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")
    goal_id = (await client.post("/goals", json=GOAL, headers=headers)).json()["id"]

    r = await client.patch(f"/goals/{goal_id}", json={"savedAmount": 1000}, headers=headers)
    assert r.status_code == 200
    assert r.json()["savedAmount"] == 1000
    assert r.json()["name"] == GOAL["name"]
    assert r.json()["targetDate"] == GOAL["targetDate"]

    r = await client.patch(f"/goals/{goal_id}", json={}, headers=headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_delete(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")
    goal_id = (await client.post("/goals", json=GOAL, headers=headers)).json()["id"]

    r = await client.delete(f"/goals/{goal_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["message"]

    assert (await client.get("/goals", headers=headers)).json() == []

    r = await client.delete(f"/goals/{goal_id}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_unknown_goal(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")
    missing = uuid.uuid4()

    r = await client.put(f"/goals/{missing}", json=GOAL, headers=headers)
    assert r.status_code == 404
    r = await client.patch(f"/goals/{missing}", json={"savedAmount": 1}, headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_cannot_touch_another_users_goal(client: httpx.AsyncClient, signup) -> None:
    owner = await signup("alice")
    intruder = await signup("mallory")
    goal = (await client.post("/goals", json=GOAL, headers=owner)).json()
    goal_id = goal["id"]

    r = await client.put(
        f"/goals/{goal_id}", json={**GOAL, "name": "Stolen"}, headers=intruder
    )
    assert r.status_code == 404
    r = await client.patch(f"/goals/{goal_id}", json={"savedAmount": 0}, headers=intruder)
    assert r.status_code == 404
    r = await client.delete(f"/goals/{goal_id}", headers=intruder)
    assert r.status_code == 404

    r = await client.get("/goals", headers=owner)
    assert r.json() == [goal]


@pytest.mark.asyncio
async def test_malformed_goal_id_is_not_found(client: httpx.AsyncClient, signup) -> None:
    headers = await signup("alice")

    r = await client.delete("/goals/not-a-uuid", headers=headers)
    assert r.status_code == 404
    r = await client.put("/goals/not-a-uuid", json=GOAL, headers=headers)
    assert r.status_code == 404
    r = await client.patch("/goals/not-a-uuid", json={"savedAmount": 1}, headers=headers)
    assert r.status_code == 404
