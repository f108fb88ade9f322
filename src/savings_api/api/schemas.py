"""
savings_api.api.schemas

Request/response models shared by the routers.

JSON uses camelCase keys; snake_case is accepted on input as well.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Users ------------------------------------------------------------------


class UserOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    username: str
    role: str
    created_at: datetime | None = None


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=1, max_length=1024)
    role: Literal["user", "admin"] = "user"


class RegisterResponse(CamelModel):
    message: str
    user: UserOut


class LoginRequest(CamelModel):
    username: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=1, max_length=1024)


class LoginResponse(CamelModel):
    message: str
    token: str


class VerifyResponse(CamelModel):
    message: str
    user: dict[str, str]


class UserListResponse(CamelModel):
    users: list[UserOut]
    total_users: int


class UserDeleteResponse(CamelModel):
    message: str
    deleted_goals: int


# --- Goals ------------------------------------------------------------------


class GoalIn(CamelModel):
    name: str = Field(min_length=1, max_length=256)
    target_amount: float = Field(gt=0)
    saved_amount: float = Field(default=0, ge=0)
    category: str = Field(min_length=1, max_length=128)
    target_date: date | None = None


class GoalPatch(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    target_amount: float | None = Field(default=None, gt=0)
    saved_amount: float | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, min_length=1, max_length=128)
    target_date: date | None = None


class GoalOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    user_id: str
    name: str
    target_amount: float
    saved_amount: float
    category: str
    target_date: date | None = None
    created_at: datetime
    updated_at: datetime


class MessageResponse(CamelModel):
    message: str
