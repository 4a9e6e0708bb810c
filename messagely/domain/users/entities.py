# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:
    """Stored user record. ``password_hash`` never leaves the server."""

    username: str
    password_hash: str
    first_name: str
    last_name: str
    phone: str
    join_at: datetime
    last_login_at: datetime | None


@dataclass(slots=True, frozen=True)
class NewUser:

    username: str
    password: str
    first_name: str
    last_name: str
    phone: str


@dataclass(slots=True, frozen=True)
class UserProfile:

    username: str
    first_name: str
    last_name: str
    phone: str
    join_at: datetime
    last_login_at: datetime | None


@dataclass(slots=True, frozen=True)
class UserSummary:

    username: str
    first_name: str
    last_name: str


@dataclass(slots=True, frozen=True)
class PartyProfile:
    """Public fields of the other party of a message."""

    username: str
    first_name: str
    last_name: str
    phone: str


@dataclass(slots=True, frozen=True)
class Identity:
    """Caller identity claimed by a verified session token."""

    username: str
