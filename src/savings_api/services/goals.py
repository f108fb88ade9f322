"""
savings_api.services.goals

Goal CRUD scoped to the calling user.

A goal that exists but belongs to another user is reported exactly like a
missing one (404), and nothing is written.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.auth.models import Principal
from savings_api.db.models import Goal
from savings_api.db.repositories.goals import GoalRepo
from savings_api.errors import MissingInput, NotFound
from savings_api.observability.logging import get_logger

log = get_logger(__name__)


class GoalService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._goals = GoalRepo(session)

    async def list_goals(self, *, owner: Principal) -> list[Goal]:
        return await self._goals.list_for_user(owner.user_id)

    async def create(self, *, owner: Principal, fields: dict[str, Any]) -> Goal:
        goal = await self._goals.create(user_id=owner.user_id, fields=fields)
        await self._session.commit()
        log.info("goal_created", goal_id=str(goal.id))
        return goal

    async def _owned(self, owner: Principal, goal_id: uuid.UUID) -> Goal:
        goal = await self._goals.get_owned(goal_id=goal_id, user_id=owner.user_id)
        if goal is None:
            raise NotFound("Goal not found")
        return goal

    async def replace(self, *, owner: Principal, goal_id: uuid.UUID, fields: dict[str, Any]) -> Goal:
        goal = await self._owned(owner, goal_id)
        await self._goals.update(goal, fields)
        await self._session.commit()
        log.info("goal_updated", goal_id=str(goal_id))
        return goal

    async def patch(self, *, owner: Principal, goal_id: uuid.UUID, fields: dict[str, Any]) -> Goal:
        if not fields:
            raise MissingInput("No updatable fields provided")
        goal = await self._owned(owner, goal_id)
        await self._goals.update(goal, fields)
        await self._session.commit()
        log.info("goal_patched", goal_id=str(goal_id), fields=sorted(fields))
        return goal

    async def delete(self, *, owner: Principal, goal_id: uuid.UUID) -> None:
        deleted = await self._goals.delete_owned(goal_id=goal_id, user_id=owner.user_id)
        if not deleted:
            raise NotFound("Goal not found")
        await self._session.commit()
        log.info("goal_deleted", goal_id=str(goal_id))
