# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Identity, NewUser, PartyProfile, User, UserProfile, UserSummary
from .exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "Identity",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NewUser",
    "PartyProfile",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserProfile",
    "UserSummary",
]
