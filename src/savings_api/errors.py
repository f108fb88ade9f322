"""
savings_api.errors

Domain error taxonomy shared by services, auth and the API boundary.

Each error carries the HTTP status it maps to; `savings_api.api.errors`
converts them into JSON responses. Nothing here depends on FastAPI so the
service layer stays framework-agnostic.
"""

from __future__ import annotations


class SavingsApiError(Exception):
    status_code: int = 500
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class MissingInput(SavingsApiError):
    status_code = 400
    default_detail = "Missing required fields"


class AuthenticationMissing(SavingsApiError):
    status_code = 401
    default_detail = "Unauthorized: No token provided"


class AuthenticationInvalid(SavingsApiError):
    status_code = 401
    default_detail = "Unauthorized: Invalid or expired token"


class AuthorizationDenied(SavingsApiError):
    status_code = 403
    default_detail = "Forbidden"


class NotFound(SavingsApiError):
    status_code = 404
    default_detail = "Not found"


class Conflict(SavingsApiError):
    status_code = 409
    default_detail = "Conflict"


class UpstreamFailure(SavingsApiError):
    status_code = 500
    default_detail = "Internal Server Error"
