# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from messagely.domain.users.entities import PartyProfile


@dataclass(slots=True, frozen=True)
class Message:

    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class MessageDetail:
    """Message joined with both parties' public profiles."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    from_user: PartyProfile
    to_user: PartyProfile

    def is_party(self, username: str) -> bool:
        return username in (self.from_user.username, self.to_user.username)

    def is_recipient(self, username: str) -> bool:
        return username == self.to_user.username


@dataclass(slots=True, frozen=True)
class MessageListing:
    """Message as seen from one party's inbox or outbox.

    ``other_party`` is the recipient for sent messages and the sender for
    received ones.
    """

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    other_party: PartyProfile


@dataclass(slots=True, frozen=True)
class ReadReceipt:

    id: int
    read_at: datetime
