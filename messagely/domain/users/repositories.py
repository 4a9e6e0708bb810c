# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from messagely.domain.messages.entities import MessageListing

from .entities import User, UserProfile, UserSummary


class UserRepository(Protocol):
    def add(self, user: User) -> User: ...
    def find_by_username(self, username: str) -> User | None: ...
    def get_profile(self, username: str) -> UserProfile | None: ...
    def list_summaries(self) -> Sequence[UserSummary]: ...
    def touch_last_login(self, username: str, when: datetime) -> None: ...
    def messages_from(self, username: str) -> Sequence[MessageListing]: ...
    def messages_to(self, username: str) -> Sequence[MessageListing]: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
