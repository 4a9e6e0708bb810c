# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from messagely.domain.users.entities import PartyProfile
from messagely.infrastructure.db.models import UserRow


def aware(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back; stored values are always UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def party_profile(row: UserRow) -> PartyProfile:
    return PartyProfile(
        username=row.username,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
    )
