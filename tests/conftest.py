from __future__ import annotations

import threading
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from messagely.app import create_app
from messagely.container import Container
from messagely.domain.users.entities import NewUser
from messagely.shared.config import AppConfig, DatabaseConfig, SecurityConfig, TwilioConfig

TEST_USER = {
    "username": "test1",
    "password": "password",
    "first_name": "Test1",
    "last_name": "Testy1",
    "phone": "+14155550000",
}

TEST_USER_2 = {
    "username": "test2",
    "password": "password",
    "first_name": "Test2",
    "last_name": "Testy2",
    "phone": "+14155550002",
}

TEST_USER_3 = {
    "username": "test3",
    "password": "password",
    "first_name": "Test3",
    "last_name": "Testy3",
    "phone": "+14155550003",
}


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.delivered = threading.Event()

    async def send_sms(self, body: str) -> None:
        self.sent.append(body)
        self.delivered.set()


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        SECRET_KEY="test-secret",
        LOG_FILE=tmp_path / "messagely.log",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        security=SecurityConfig(PASSWORD_WORK_FACTOR=1000),
        twilio=TwilioConfig(),
    )


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def container(config: AppConfig, notifier: RecordingNotifier):
    container = Container(config)
    container.notifier = notifier
    yield container
    container.notification_dispatcher.stop()
    container.engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def users(app: Flask, container: Container) -> dict[str, str]:
    """Register the three test users and return a token per username."""
    tokens = {}
    for fields in (TEST_USER, TEST_USER_2, TEST_USER_3):
        user = container.user_directory.register(NewUser(**fields))
        tokens[user.username] = container.session_issuer.issue(user.username)
    return tokens


@pytest.fixture()
def message_id(users: dict[str, str], container: Container) -> int:
    message = container.message_store.create("test1", "test2", "hello world!")
    return message.id
