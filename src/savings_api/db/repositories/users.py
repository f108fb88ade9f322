"""
savings_api.db.repositories.users

Repository for `User` entities.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.db.models import User, UserRole


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        username: str,
        role: UserRole = UserRole.user,
        password_hash: str | None = None,
        user_id: str | None = None,
    ) -> User:
        user = User(username=username, role=role, password_hash=password_hash)
        if user_id is not None:
            user.id = user_id
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: str) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def delete(self, user_id: str) -> int:
        result = await self._session.execute(delete(User).where(User.id == user_id))
        return result.rowcount or 0
