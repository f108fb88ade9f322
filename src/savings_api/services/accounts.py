"""
savings_api.services.accounts

Account lifecycle service.

Responsibilities:
- Register accounts (locally hashed, or at the identity provider in delegated mode).
- Log in and hand back a bearer token.
- Admin operations: list users, delete a user together with all of their goals.
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.auth.identity_provider import IdentityProviderClient
from savings_api.auth.jwt import issue_token
from savings_api.auth.models import Principal
from savings_api.auth.passwords import hash_password, verify_password
from savings_api.auth.verifiers import jwt_config
from savings_api.db.models import User, UserRole
from savings_api.db.repositories.goals import GoalRepo
from savings_api.db.repositories.users import UserRepo
from savings_api.errors import AuthenticationInvalid, AuthorizationDenied, Conflict, NotFound
from savings_api.observability.logging import get_logger
from savings_api.settings import Settings

log = get_logger(__name__)


class AccountService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        identity_provider: IdentityProviderClient | None = None,
    ) -> None:
        self._session = session
        self._settings = settings
        self._idp = identity_provider

        self._users = UserRepo(session)
        self._goals = GoalRepo(session)

    @property
    def _delegated(self) -> bool:
        return self._settings.auth_strategy == "delegated"

    def _require_idp(self) -> IdentityProviderClient:
        if self._idp is None:
            raise RuntimeError("identity provider client is not configured")
        return self._idp

    async def register(self, *, username: str, password: str, role: UserRole) -> User:
        if role == UserRole.admin and not self._settings.allow_admin_signup:
            log.warning("admin_signup_rejected", username=username)
            raise AuthorizationDenied("Admin registration is disabled")

        if await self._users.get_by_username(username) is not None:
            raise Conflict("Username already exists")

        try:
            if self._delegated:
                record = await self._require_idp().create_user(email=username, password=password)
                user = await self._users.create(username=username, role=role, user_id=record.uid)
            else:
                user = await self._users.create(
                    username=username, role=role, password_hash=hash_password(password)
                )
            await self._session.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent registration of the same username.
            await self._session.rollback()
            raise Conflict("Username already exists") from e

        log.info("user_registered", user_id=user.id, role=user.role.value)
        return user

    async def login(self, *, username: str, password: str) -> str:
        if self._delegated:
            token = await self._require_idp().sign_in(email=username, password=password)
            log.info("user_logged_in", username=username)
            return token

        user = await self._users.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            log.warning("login_failed", username=username)
            raise AuthenticationInvalid("Invalid credentials")

        log.info("user_logged_in", user_id=user.id)
        return issue_token(
            cfg=jwt_config(self._settings),
            subject=user.id,
            username=user.username,
            role=user.role.value,
            ttl=timedelta(minutes=self._settings.jwt_ttl_minutes),
        )

    async def profile(self, principal: Principal) -> User:
        user = await self._users.get(principal.user_id)
        if user is None:
            raise NotFound("User profile not found")
        return user

    async def list_users(self) -> list[User]:
        return await self._users.list_all()

    async def delete_user(self, *, user_id: str, actor: Principal) -> int:
        """
        Remove a user and every goal they own as one transaction.
        Returns the number of goals removed.

        In delegated mode the provider account goes first. That step is idempotent, so if
        the local transaction then fails, retrying the whole deletion is safe.
        """

        if await self._users.get(user_id) is None:
            raise NotFound("User not found")

        if self._delegated:
            await self._require_idp().delete_user(uid=user_id)

        try:
            deleted_goals = await self._goals.delete_for_user(user_id)
            await self._users.delete(user_id)
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            log.error("user_delete_rolled_back", user_id=user_id)
            raise

        log.info("user_deleted", user_id=user_id, deleted_goals=deleted_goals, actor=actor.user_id)
        return deleted_goals
