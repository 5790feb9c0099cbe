# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from webclipper.domain.values import USER_ID_MAX_LENGTH, USERNAME_MAX_LENGTH
from webclipper.infrastructure.db.session import Base


class UserRow(Base):
    __tablename__ = "users"
    # Single-user mode: every row carries singleton=1, so a second insert hits the unique index.
    __table_args__ = (CheckConstraint("singleton = 1", name="ck_users_singleton"),)

    id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), primary_key=True)
    singleton: Mapped[int] = mapped_column(Integer, default=1, server_default="1", unique=True)
    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), unique=True)
    password_hash: Mapped[str] = mapped_column(String(128))
    password_salt: Mapped[str] = mapped_column(String(128))
    # NULLs never collide under the unique index
    github_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class SessionRow(Base):
    __tablename__ = "sessions"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
