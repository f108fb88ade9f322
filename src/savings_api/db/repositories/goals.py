"""
savings_api.db.repositories.goals

Repository for `Goal` entities.

Every query takes the owning user id; there is no unscoped single-goal
lookup, so a goal is only reachable through its owner.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.db.models import Goal

# Columns a caller may write; ownership and timestamps are server-managed.
UPDATABLE_FIELDS = frozenset({"name", "target_amount", "saved_amount", "category", "target_date"})


class GoalRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, user_id: str, fields: dict[str, Any]) -> Goal:
        goal = Goal(user_id=user_id, **_writable(fields))
        self._session.add(goal)
        await self._session.flush()
        return goal

    async def list_for_user(self, user_id: str) -> list[Goal]:
        stmt = select(Goal).where(Goal.user_id == user_id).order_by(desc(Goal.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def get_owned(self, *, goal_id: uuid.UUID, user_id: str) -> Goal | None:
        stmt = select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def update(self, goal: Goal, fields: dict[str, Any]) -> Goal:
        for key, value in _writable(fields).items():
            setattr(goal, key, value)
        goal.updated_at = datetime.utcnow()
        await self._session.flush()
        return goal

    async def delete_owned(self, *, goal_id: uuid.UUID, user_id: str) -> int:
        stmt = delete(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def delete_for_user(self, user_id: str) -> int:
        # Batch delete used by the account cascade.
        result = await self._session.execute(delete(Goal).where(Goal.user_id == user_id))
        return result.rowcount or 0


def _writable(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
