"""
savings_api.api.routers.users

Admin-only user management.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from savings_api.api.deps import account_service_dep
from savings_api.api.schemas import UserDeleteResponse, UserListResponse, UserOut
from savings_api.auth.deps import require_role
from savings_api.auth.models import Principal
from savings_api.services.accounts import AccountService

router = APIRouter(prefix="/users", tags=["users"])

require_admin = require_role("admin")


@router.get("", response_model=UserListResponse, dependencies=[Depends(require_admin)])
async def list_users(accounts: AccountService = Depends(account_service_dep)) -> UserListResponse:
    users = await accounts.list_users()
    return UserListResponse(
        users=[UserOut.model_validate(u) for u in users],
        total_users=len(users),
    )


@router.delete("/{user_id}", response_model=UserDeleteResponse)
async def delete_user(
    user_id: str,
    admin: Principal = Depends(require_admin),
    accounts: AccountService = Depends(account_service_dep),
) -> UserDeleteResponse:
    deleted_goals = await accounts.delete_user(user_id=user_id, actor=admin)
    return UserDeleteResponse(
        message="User and associated goals deleted", deleted_goals=deleted_goals
    )
