# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from messagely.application.services.message_store import MessageStore
from messagely.application.services.password_hashing import WerkzeugPasswordHasher
from messagely.application.services.session_tokens import SessionIssuer
from messagely.application.services.user_directory import UserDirectory
from messagely.application.use_cases.users.login_user import LoginUserUseCase
from messagely.application.use_cases.users.register_user import RegisterUserUseCase
from messagely.domain.messages.repositories import NotificationPort
from messagely.infrastructure.db import create_db_engine, create_session_factory
from messagely.infrastructure.notifications import (
    NotificationDispatcher,
    NullNotifier,
    TwilioSmsNotifier,
)
from messagely.infrastructure.repositories.messages import SqlAlchemyMessageRepository
from messagely.infrastructure.repositories.users import SqlAlchemyUserRepository
from messagely.interfaces.http.controllers.auth_controller import AuthController
from messagely.interfaces.http.controllers.messages_controller import MessagesController
from messagely.interfaces.http.controllers.misc_controller import MiscController
from messagely.interfaces.http.controllers.users_controller import UsersController
from messagely.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self.config.security.password_work_factor)

    @cached_property
    def session_issuer(self) -> SessionIssuer:
        return SessionIssuer(self.config.secret_key, algorithm=self.config.security.jwt_algorithm)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def message_repository(self) -> SqlAlchemyMessageRepository:
        return SqlAlchemyMessageRepository(self.session_factory)

    @cached_property
    def user_directory(self) -> UserDirectory:
        return UserDirectory(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def message_store(self) -> MessageStore:
        return MessageStore(messages=self.message_repository)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(directory=self.user_directory, sessions=self.session_issuer)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(directory=self.user_directory, sessions=self.session_issuer)

    @cached_property
    def notifier(self) -> NotificationPort:
        if self.config.twilio.enabled:
            return TwilioSmsNotifier(self.config.twilio, self.config.resilience)
        return NullNotifier()

    @cached_property
    def notification_dispatcher(self) -> NotificationDispatcher:
        return NotificationDispatcher()

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(directory=self.user_directory)

    @cached_property
    def messages_controller(self) -> MessagesController:
        return MessagesController(
            store=self.message_store,
            notifier=self.notifier,
            dispatcher=self.notification_dispatcher,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
