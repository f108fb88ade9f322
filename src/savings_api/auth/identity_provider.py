"""
savings_api.auth.identity_provider

HTTP client boundary for the external identity provider (delegated strategy).

Responsibilities:
- Create and delete accounts, sign in with password, and look up the account behind an id token.
- Translate provider error codes into the service's error taxonomy.

The wire format follows the Identity Toolkit REST API (`/v1/accounts:<method>?key=...`),
where failures come back as `{"error": {"message": "<CODE>[ : detail]"}}`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from savings_api.errors import (
    AuthenticationInvalid,
    Conflict,
    MissingInput,
    UpstreamFailure,
)
from savings_api.observability.logging import get_logger
from savings_api.settings import Settings

log = get_logger(__name__)

_BAD_CREDENTIALS = frozenset(
    {"EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "USER_DISABLED"}
)


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    uid: str
    email: str | None = None


class IdentityProviderError(Exception):
    """A 4xx answer from the provider; `code` is the leading error token."""

    def __init__(self, code: str, status_code: int) -> None:
        super().__init__(code)
        self.code = code
        self.status_code = status_code


class IdentityProviderClient:
    def __init__(self, *, http: httpx.AsyncClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            r = await self._http.post(
                f"/v1/accounts:{method}",
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.HTTPError as e:
            log.error("identity_provider_unreachable", method=method, error=str(e))
            raise UpstreamFailure("Identity provider unavailable") from e

        if r.status_code >= 500:
            log.error("identity_provider_error", method=method, status=r.status_code)
            raise UpstreamFailure("Identity provider unavailable")
        if r.status_code >= 400:
            raise IdentityProviderError(_error_code(r), r.status_code)
        return r.json()

    async def create_user(self, *, email: str, password: str) -> IdentityRecord:
        try:
            body = await self._call(
                "signUp", {"email": email, "password": password, "returnSecureToken": False}
            )
        except IdentityProviderError as e:
            if e.code == "EMAIL_EXISTS":
                raise Conflict("Username already exists") from e
            raise MissingInput(f"Invalid registration details: {e.code}") from e
        return IdentityRecord(uid=str(body["localId"]), email=body.get("email", email))

    async def sign_in(self, *, email: str, password: str) -> str:
        try:
            body = await self._call(
                "signInWithPassword",
                {"email": email, "password": password, "returnSecureToken": True},
            )
        except IdentityProviderError as e:
            if e.code in _BAD_CREDENTIALS:
                raise AuthenticationInvalid("Invalid credentials") from e
            raise AuthenticationInvalid(f"Sign-in rejected: {e.code}") from e
        return str(body["idToken"])

    async def verify_token(self, id_token: str) -> IdentityRecord:
        try:
            body = await self._call("lookup", {"idToken": id_token})
        except IdentityProviderError as e:
            if e.code == "USER_NOT_FOUND":
                raise AuthenticationInvalid("Unauthorized: User no longer exists") from e
            raise AuthenticationInvalid() from e

        users = body.get("users") or []
        if not users:
            raise AuthenticationInvalid("Unauthorized: User no longer exists")
        account = users[0]
        return IdentityRecord(uid=str(account["localId"]), email=account.get("email"))

    async def delete_user(self, *, uid: str) -> None:
        """
        Remove the account at the provider. An account that is already gone counts as
        deleted, so a retried user deletion can run this step again.
        """

        try:
            await self._call("delete", {"localId": uid})
        except IdentityProviderError as e:
            if e.code == "USER_NOT_FOUND":
                return
            log.error("identity_provider_delete_rejected", uid=uid, code=e.code)
            raise UpstreamFailure("Identity provider refused the account deletion") from e


def _error_code(response: httpx.Response) -> str:
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP_{response.status_code}"
    # e.g. "WEAK_PASSWORD : Password should be at least 6 characters"
    return str(message).split(" ", 1)[0]


def build_identity_provider(settings: Settings) -> tuple[IdentityProviderClient, httpx.AsyncClient]:
    """
    Returns the client plus the underlying httpx client so the caller can close it on shutdown.
    """

    http = httpx.AsyncClient(
        base_url=settings.identity_provider_url,
        timeout=settings.identity_provider_timeout_seconds,
    )
    return IdentityProviderClient(http=http, api_key=settings.identity_provider_api_key), http
