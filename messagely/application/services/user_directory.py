# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from messagely.domain.messages.entities import MessageListing
from messagely.domain.users.entities import NewUser, User, UserProfile, UserSummary
from messagely.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from messagely.domain.users.repositories import PasswordHasher, UserRepository
from messagely.shared.logging import logger


class UserDirectory:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def register(self, fields: NewUser) -> User:
        if self._users.find_by_username(fields.username):
            raise UserAlreadyExistsError(f"Username already taken: {fields.username}")
        now = datetime.now(UTC)
        user = User(
            username=fields.username,
            password_hash=self._password_hasher.hash(fields.password),
            first_name=fields.first_name,
            last_name=fields.last_name,
            phone=fields.phone,
            join_at=now,
            last_login_at=now,
        )
        persisted = self._users.add(user)
        logger.info(f"users.register: ok username={persisted.username}")
        return persisted

    def authenticate(self, username: str, password: str) -> bool:
        # Unknown user and wrong password are reported the same way.
        user = self._users.find_by_username(username)
        if user is None:
            return False
        return self._password_hasher.verify(password, user.password_hash)

    def update_login_timestamp(self, username: str) -> None:
        self._users.touch_last_login(username, datetime.now(UTC))

    def get(self, username: str) -> UserProfile:
        profile = self._users.get_profile(username)
        if profile is None:
            raise UserNotFoundError(username)
        return profile

    def all(self) -> list[UserSummary]:
        return list(self._users.list_summaries())

    def messages_from(self, username: str) -> list[MessageListing]:
        return list(self._users.messages_from(username))

    def messages_to(self, username: str) -> list[MessageListing]:
        return list(self._users.messages_to(username))
