# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from messagely.domain.messages.entities import MessageListing
from messagely.domain.users.entities import User, UserProfile, UserSummary
from messagely.domain.users.exceptions import UserAlreadyExistsError
from messagely.domain.users.repositories import UserRepository
from messagely.infrastructure.db.models import MessageRow, UserRow
from messagely.infrastructure.db.session import unit_of_work_scope

from ._mapping import aware, party_profile


def _to_domain(row: UserRow) -> User:
    return User(
        username=row.username,
        password_hash=row.password,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
        join_at=aware(row.join_at),
        last_login_at=aware(row.last_login_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, user: User) -> User:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = UserRow(
                    username=user.username,
                    password=user.password_hash,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    phone=user.phone,
                    join_at=user.join_at,
                    last_login_at=user.last_login_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError(f"Username already taken: {user.username}") from exc

    def find_by_username(self, username: str) -> User | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(UserRow, username)
            return _to_domain(row) if row else None

    def get_profile(self, username: str) -> UserProfile | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(UserRow, username)
            if not row:
                return None
            return UserProfile(
                username=row.username,
                first_name=row.first_name,
                last_name=row.last_name,
                phone=row.phone,
                join_at=aware(row.join_at),
                last_login_at=aware(row.last_login_at),
            )

    def list_summaries(self) -> Sequence[UserSummary]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.execute(
                select(UserRow.username, UserRow.first_name, UserRow.last_name).order_by(
                    UserRow.username.asc()
                )
            ).all()
        return [
            UserSummary(username=username, first_name=first_name, last_name=last_name)
            for username, first_name, last_name in rows
        ]

    def touch_last_login(self, username: str, when: datetime) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(UserRow).where(UserRow.username == username).values(last_login_at=when)
            )

    def messages_from(self, username: str) -> Sequence[MessageListing]:
        return self._listings(username, sent=True)

    def messages_to(self, username: str) -> Sequence[MessageListing]:
        return self._listings(username, sent=False)

    def _listings(self, username: str, *, sent: bool) -> list[MessageListing]:
        other = aliased(UserRow)
        if sent:
            own_column, join_column = MessageRow.from_username, MessageRow.to_username
        else:
            own_column, join_column = MessageRow.to_username, MessageRow.from_username

        with unit_of_work_scope(self._session_factory) as session:
            rows = session.execute(
                select(MessageRow, other)
                .join(other, join_column == other.username)
                .where(own_column == username)
                .order_by(MessageRow.id.asc())
            ).all()
            return [
                MessageListing(
                    id=message.id,
                    body=message.body,
                    sent_at=aware(message.sent_at),
                    read_at=aware(message.read_at),
                    other_party=party_profile(party),
                )
                for message, party in rows
            ]
