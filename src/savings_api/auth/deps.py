"""
savings_api.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal` (the auth gate).
- Enforce the admin role via a reusable dependency factory (RoleCheck).
"""

from __future__ import annotations

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.api.deps import db_session, token_verifier_dep
from savings_api.auth.models import Principal
from savings_api.auth.verifiers import TokenVerifier
from savings_api.errors import AuthenticationInvalid, AuthenticationMissing, AuthorizationDenied
from savings_api.observability.logging import get_logger

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    verifier: TokenVerifier = Depends(token_verifier_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal:
    if creds is None or not creds.credentials:
        log.warning("auth_missing")
        raise AuthenticationMissing()

    try:
        principal = await verifier.verify(creds.credentials, session)
    except AuthenticationInvalid as e:
        log.warning("auth_invalid", reason=e.detail)
        raise

    structlog.contextvars.bind_contextvars(user_id=principal.user_id)
    return principal


def require_role(role: str):
    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role != role:
            log.warning("authz_denied", required=role, role=principal.role)
            raise AuthorizationDenied(f"Forbidden: {role} role required")
        return principal

    return _dep
