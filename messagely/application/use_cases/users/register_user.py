# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from messagely.application.services.session_tokens import SessionIssuer
from messagely.application.services.user_directory import UserDirectory
from messagely.domain.users.entities import NewUser, User


class RegisterUserUseCase:
    def __init__(self, *, directory: UserDirectory, sessions: SessionIssuer) -> None:
        self._directory = directory
        self._sessions = sessions

    def execute(self, fields: NewUser) -> tuple[User, str]:
        user = self._directory.register(fields)
        token = self._sessions.issue(user.username)
        return user, token
