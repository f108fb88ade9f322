"""
savings_api.auth.verifiers

Token verifier strategies behind the auth gate.

Responsibilities:
- `SelfIssuedTokenVerifier`: validate our own signed JWT, then confirm the user row still exists.
- `DelegatedTokenVerifier`: hand the opaque token to the identity provider.
- Select exactly one strategy from settings.

Both resolve to a `Principal` or raise `AuthenticationInvalid`. The role on the
Principal always comes from the stored user row, never from a token claim.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.auth.identity_provider import IdentityProviderClient
from savings_api.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from savings_api.auth.models import Principal
from savings_api.db.repositories.users import UserRepo
from savings_api.errors import AuthenticationInvalid
from savings_api.settings import Settings


class TokenVerifier(Protocol):
    async def verify(self, token: str, session: AsyncSession) -> Principal: ...


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


class SelfIssuedTokenVerifier:
    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    async def verify(self, token: str, session: AsyncSession) -> Principal:
        try:
            payload = decode_and_validate(cfg=self._cfg, token=token)
        except JwtValidationError as e:
            raise AuthenticationInvalid() from e

        user_id = str(payload.get("sub", ""))
        if not user_id:
            raise AuthenticationInvalid()

        user = await UserRepo(session).get(user_id)
        if user is None:
            raise AuthenticationInvalid("Unauthorized: User no longer exists")
        return Principal(user_id=user.id, username=user.username, role=user.role.value)


class DelegatedTokenVerifier:
    def __init__(self, identity_provider: IdentityProviderClient) -> None:
        self._idp = identity_provider

    async def verify(self, token: str, session: AsyncSession) -> Principal:
        record = await self._idp.verify_token(token)
        # The provider owns identity; the local profile row owns the role. Every delegated
        # account gets that row at registration, so a missing row means the user was removed.
        profile = await UserRepo(session).get(record.uid)
        if profile is None:
            raise AuthenticationInvalid("Unauthorized: User no longer exists")
        return Principal(user_id=profile.id, username=profile.username, role=profile.role.value)


def build_token_verifier(
    settings: Settings, identity_provider: IdentityProviderClient | None
) -> TokenVerifier:
    if settings.auth_strategy == "delegated":
        if identity_provider is None:
            raise RuntimeError("delegated auth requires an identity provider client")
        return DelegatedTokenVerifier(identity_provider)
    return SelfIssuedTokenVerifier(jwt_config(settings))
