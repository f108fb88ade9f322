"""
savings_api.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, resolved from the bearer credential.
    """

    user_id: str
    username: str
    role: str

    def as_dict(self) -> dict[str, str]:
        return {"id": self.user_id, "username": self.username, "role": self.role}
