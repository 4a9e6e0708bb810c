# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from messagely.domain.messages.entities import Message, MessageDetail, ReadReceipt
from messagely.domain.messages.repositories import MessageRepository
from messagely.domain.users.exceptions import UserNotFoundError
from messagely.infrastructure.db.models import MessageRow, UserRow
from messagely.infrastructure.db.session import unit_of_work_scope

from ._mapping import aware, party_profile

# Integer primary keys are signed 64-bit; larger ids cannot name a row.
_MAX_MESSAGE_ID = 2**63 - 1


def _storable(message_id: int) -> bool:
    return 0 < message_id <= _MAX_MESSAGE_ID


class SqlAlchemyMessageRepository(MessageRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, from_username: str, to_username: str, body: str, sent_at: datetime) -> Message:
        with unit_of_work_scope(self._session_factory) as session:
            for username in (from_username, to_username):
                if session.get(UserRow, username) is None:
                    raise UserNotFoundError(username)

            row = MessageRow(
                from_username=from_username,
                to_username=to_username,
                body=body,
                sent_at=sent_at,
                read_at=None,
            )
            session.add(row)
            session.flush()
            return Message(
                id=row.id,
                from_username=row.from_username,
                to_username=row.to_username,
                body=row.body,
                sent_at=aware(row.sent_at),
                read_at=None,
            )

    def get_detail(self, message_id: int) -> MessageDetail | None:
        if not _storable(message_id):
            return None
        with unit_of_work_scope(self._session_factory) as session:
            row = session.execute(
                select(MessageRow)
                .options(joinedload(MessageRow.from_user), joinedload(MessageRow.to_user))
                .where(MessageRow.id == message_id)
            ).scalar_one_or_none()
            if row is None:
                return None
            return MessageDetail(
                id=row.id,
                body=row.body,
                sent_at=aware(row.sent_at),
                read_at=aware(row.read_at),
                from_user=party_profile(row.from_user),
                to_user=party_profile(row.to_user),
            )

    def mark_read(self, message_id: int, when: datetime) -> ReadReceipt | None:
        if not _storable(message_id):
            return None
        with unit_of_work_scope(self._session_factory) as session:
            # Only the first read sets the timestamp.
            session.execute(
                update(MessageRow)
                .where(MessageRow.id == message_id, MessageRow.read_at.is_(None))
                .values(read_at=when)
            )
            row = session.get(MessageRow, message_id)
            if row is None or row.read_at is None:
                return None
            return ReadReceipt(id=row.id, read_at=aware(row.read_at))
