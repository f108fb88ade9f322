"""
savings_api.api.routers.goals

Goal CRUD for the authenticated caller. Every route resolves the caller first;
the service never sees a goal outside the caller's own set.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from savings_api.api.deps import db_session
from savings_api.api.schemas import GoalIn, GoalOut, GoalPatch, MessageResponse
from savings_api.auth.deps import get_principal
from savings_api.auth.models import Principal
from savings_api.errors import NotFound
from savings_api.services.goals import GoalService

router = APIRouter(prefix="/goals", tags=["goals"])

# Only target_date may be cleared by sending null.
_NULLABLE = frozenset({"target_date"})


def _goals(session: AsyncSession = Depends(db_session)) -> GoalService:
    return GoalService(session=session)


def _parse_goal_id(raw: str) -> uuid.UUID:
    # An id that cannot be a goal id names no goal.
    try:
        return uuid.UUID(raw)
    except ValueError as e:
        raise NotFound("Goal not found") from e


def _patch_fields(body: GoalPatch) -> dict[str, Any]:
    fields = body.model_dump(exclude_unset=True)
    return {k: v for k, v in fields.items() if v is not None or k in _NULLABLE}


@router.get("", response_model=list[GoalOut])
async def list_goals(
    principal: Principal = Depends(get_principal),
    goals: GoalService = Depends(_goals),
) -> list[GoalOut]:
    return [GoalOut.model_validate(g) for g in await goals.list_goals(owner=principal)]


@router.post("", response_model=GoalOut, status_code=HTTP_201_CREATED)
async def create_goal(
    body: GoalIn,
    principal: Principal = Depends(get_principal),
    goals: GoalService = Depends(_goals),
) -> GoalOut:
    goal = await goals.create(owner=principal, fields=body.model_dump())
    return GoalOut.model_validate(goal)


@router.put("/{goal_id}", response_model=GoalOut)
async def replace_goal(
    goal_id: str,
    body: GoalIn,
    principal: Principal = Depends(get_principal),
    goals: GoalService = Depends(_goals),
) -> GoalOut:
    goal = await goals.replace(
        owner=principal, goal_id=_parse_goal_id(goal_id), fields=body.model_dump()
    )
    return GoalOut.model_validate(goal)


@router.patch("/{goal_id}", response_model=GoalOut)
async def patch_goal(
    goal_id: str,
    body: GoalPatch,
    principal: Principal = Depends(get_principal),
    goals: GoalService = Depends(_goals),
) -> GoalOut:
    goal = await goals.patch(
        owner=principal, goal_id=_parse_goal_id(goal_id), fields=_patch_fields(body)
    )
    return GoalOut.model_validate(goal)


@router.delete("/{goal_id}", response_model=MessageResponse)
async def delete_goal(
    goal_id: str,
    principal: Principal = Depends(get_principal),
    goals: GoalService = Depends(_goals),
) -> MessageResponse:
    await goals.delete(owner=principal, goal_id=_parse_goal_id(goal_id))
    return MessageResponse(message="Goal deleted successfully")
