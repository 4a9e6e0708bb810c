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
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Error whose code and status come from class attributes of the subclass."""

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(type(self), "default_code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(type(self), "default_status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(
            code=resolved_code, status=resolved_status, message=message, context=context
        )


class BadRequestError(DomainError):
    default_code = "bad_request"
    default_status = HTTPStatus.BAD_REQUEST


class UnauthorizedError(DomainError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED


class NotFoundError(DomainError):
    default_code = "not_found"
    default_status = HTTPStatus.NOT_FOUND


class ConflictError(DomainError):
    default_code = "conflict"
    default_status = HTTPStatus.CONFLICT


class ValidationError(BadRequestError):
    default_code = "validation_error"


__all__ = [
    "AppError",
    "BadRequestError",
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
]
