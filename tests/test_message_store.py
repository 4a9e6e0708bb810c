from __future__ import annotations

import pytest

from messagely.container import Container
from messagely.domain.messages.exceptions import MessageNotFoundError
from messagely.domain.users.exceptions import UserNotFoundError


def test_create_sets_sent_at_and_leaves_read_at_unset(users, container: Container) -> None:
    message = container.message_store.create("test1", "test2", "hello")

    assert message.id > 0
    assert message.sent_at.tzinfo is not None
    assert message.read_at is None


def test_ids_are_monotonic(users, container: Container) -> None:
    first = container.message_store.create("test1", "test2", "a")
    second = container.message_store.create("test2", "test1", "b")

    assert second.id > first.id


def test_create_to_unknown_recipient(users, container: Container) -> None:
    with pytest.raises(UserNotFoundError):
        container.message_store.create("test1", "nobody", "hello")


def test_get_joins_both_parties(message_id: int, container: Container) -> None:
    detail = container.message_store.get(message_id)

    assert detail.body == "hello world!"
    assert detail.from_user.username == "test1"
    assert detail.to_user.username == "test2"
    assert detail.to_user.first_name == "Test2"


def test_get_missing(app, container: Container) -> None:
    with pytest.raises(MessageNotFoundError) as excinfo:
        container.message_store.get(12345)
    assert excinfo.value.status == 404


def test_mark_read_keeps_first_timestamp(message_id: int, container: Container) -> None:
    first = container.message_store.mark_read(message_id)
    second = container.message_store.mark_read(message_id)

    assert first.read_at is not None
    assert second.read_at == first.read_at
    assert container.message_store.get(message_id).read_at == first.read_at


def test_mark_read_missing(app, container: Container) -> None:
    with pytest.raises(MessageNotFoundError):
        container.message_store.mark_read(12345)


@pytest.mark.parametrize("message_id", [0, 2**63, 10**20])
def test_ids_outside_storable_range_are_missing(app, container: Container, message_id: int) -> None:
    with pytest.raises(MessageNotFoundError):
        container.message_store.get(message_id)
    with pytest.raises(MessageNotFoundError):
        container.message_store.mark_read(message_id)
