# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from messagely.shared.errors.base import ConflictError, NotFoundError, UnauthorizedError


class UserAlreadyExistsError(ConflictError):
    default_code = "user_already_exists"


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"

    def __init__(self, username: str) -> None:
        super().__init__(f"No such user: {username}", context={"username": username})


class InvalidCredentialsError(UnauthorizedError):
    default_code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid username/password")


class InvalidTokenError(UnauthorizedError):
    default_code = "invalid_token"
