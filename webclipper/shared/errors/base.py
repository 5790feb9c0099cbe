# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Expected business failure; subclasses pin ``code``, ``status`` and ``message``."""

    def __init__(
        self,
        message: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = cast(str, getattr(self, "code", "DOMAIN_ERROR"))
        resolved_status = cast(HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST))
        fallback_message = cast(str, getattr(self, "message", ""))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=message if message is not None else fallback_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "INFRASTRUCTURE_ERROR",
        *,
        message: str = "Internal error",
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, message=message, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        message: str = "Invalid request",
        *,
        code: str = "VALIDATION_ERROR",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            message=message,
            context=context,
        )


class RateLimitedError(AppError):
    def __init__(self) -> None:
        super().__init__(
            code="RATE_LIMITED",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message="Too many requests",
        )
