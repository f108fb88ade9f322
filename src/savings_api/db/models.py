"""
savings_api.db.models

Persistence schema.

Responsibilities:
- Define ORM models:
  - User: account identity, role and password hash
  - Goal: a savings target owned by exactly one user
"""

from __future__ import annotations

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, Enum, ForeignKey, Index, Numeric, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from savings_api.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no tz-aware column type.
    return datetime.utcnow()


def _new_user_id() -> str:
    return str(uuid.uuid4())


class UserRole(enum.StrEnum):
    user = "user"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    # String key: either a server-assigned UUID or the identity provider's uid.
    id: Mapped[str] = mapped_column(String(128), primary_key=True, default=_new_user_id)
    username: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False, default=UserRole.user)
    # Null for accounts whose credentials live at the identity provider.
    password_hash: Mapped[str | None] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    goals: Mapped[list[Goal]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    target_amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    saved_amount: Mapped[float] = mapped_column(
        Numeric(14, 2, asdecimal=False), nullable=False, default=0
    )
    category: Mapped[str] = mapped_column(String(128), nullable=False)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    user: Mapped[User] = relationship(back_populates="goals")

    __table_args__ = (Index("ix_goals_user_created", "user_id", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# Amounts are stored as fixed-point NUMERIC and surfaced as floats in the API.
