from __future__ import annotations

import pytest

from messagely.container import Container
from messagely.domain.users.entities import NewUser
from messagely.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError

from .conftest import TEST_USER


def test_register_hashes_password_and_sets_timestamps(app, container: Container) -> None:
    user = container.user_directory.register(NewUser(**TEST_USER))

    assert user.username == "test1"
    assert user.password_hash != "password"
    assert user.password_hash.startswith("pbkdf2:sha256:1000$")
    assert user.join_at == user.last_login_at
    assert user.join_at.tzinfo is not None


def test_register_duplicate_username(app, container: Container) -> None:
    container.user_directory.register(NewUser(**TEST_USER))

    with pytest.raises(UserAlreadyExistsError) as excinfo:
        container.user_directory.register(NewUser(**TEST_USER))
    assert excinfo.value.status == 409


def test_authenticate_failures_are_indistinguishable(users, container: Container) -> None:
    directory = container.user_directory

    assert directory.authenticate("test1", "password") is True
    assert directory.authenticate("test1", "wrong") is False
    assert directory.authenticate("nobody", "password") is False


def test_update_login_timestamp(users, container: Container) -> None:
    directory = container.user_directory
    before = directory.get("test1").last_login_at

    directory.update_login_timestamp("test1")

    assert directory.get("test1").last_login_at >= before


def test_update_login_timestamp_for_unknown_user_is_silent(app, container: Container) -> None:
    container.user_directory.update_login_timestamp("nobody")


def test_get_unknown_user(app, container: Container) -> None:
    with pytest.raises(UserNotFoundError) as excinfo:
        container.user_directory.get("nobody")
    assert excinfo.value.status == 404


def test_all_is_ordered_by_username(app, container: Container) -> None:
    for name in ("zed", "amy", "mike"):
        container.user_directory.register(NewUser(**{**TEST_USER, "username": name}))

    assert [u.username for u in container.user_directory.all()] == ["amy", "mike", "zed"]


def test_messages_from_and_to_carry_other_party(users, container: Container) -> None:
    container.message_store.create("test1", "test2", "first")
    container.message_store.create("test2", "test1", "reply")
    container.message_store.create("test3", "test2", "unrelated")

    sent = container.user_directory.messages_from("test1")
    received = container.user_directory.messages_to("test1")

    assert [(m.body, m.other_party.username) for m in sent] == [("first", "test2")]
    assert [(m.body, m.other_party.username) for m in received] == [("reply", "test2")]
    assert received[0].other_party.phone == "+14155550002"
    assert not hasattr(received[0].other_party, "password_hash")
