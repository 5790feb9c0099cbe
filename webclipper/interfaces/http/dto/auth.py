# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from webclipper.application.dto import AuthStatus, SetupStatus
from webclipper.domain import Username
from webclipper.shared.result import Err

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class SetupRequestDTO(BaseModel):
    username: str
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        parsed = Username.create(value)
        if isinstance(parsed, Err):
            raise PydanticCustomError("username_invalid", parsed.error.message)
        return parsed.value.value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class GitHubCallbackQueryDTO(BaseModel):
    code: str = Field(min_length=1)
    state: str = Field(min_length=1)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class AuthUserDTO(_CamelModel):
    id: str
    username: str
    github_linked: bool


class AuthStatusDTO(_CamelModel):
    authenticated: bool
    user: AuthUserDTO | None
    needs_setup: bool

    @classmethod
    def from_status(cls, status: AuthStatus) -> AuthStatusDTO:
        user = None
        if status.user is not None:
            user = AuthUserDTO(
                id=status.user.id,
                username=status.user.username,
                github_linked=status.user.github_linked,
            )
        return cls(authenticated=status.authenticated, user=user, needs_setup=status.needs_setup)


class SetupStatusDTO(_CamelModel):
    needs_setup: bool

    @classmethod
    def from_status(cls, status: SetupStatus) -> SetupStatusDTO:
        return cls(needs_setup=status.needs_setup)
