# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from messagely.application.services.session_tokens import SessionIssuer
from messagely.application.services.user_directory import UserDirectory
from messagely.domain.users.exceptions import InvalidCredentialsError
from messagely.shared.logging import logger


class LoginUserUseCase:
    def __init__(self, *, directory: UserDirectory, sessions: SessionIssuer) -> None:
        self._directory = directory
        self._sessions = sessions

    def execute(self, username: str, password: str) -> str:
        if not self._directory.authenticate(username, password):
            logger.warning(f"auth.login: rejected username={username}")
            raise InvalidCredentialsError()

        self._directory.update_login_timestamp(username)
        return self._sessions.issue(username)
