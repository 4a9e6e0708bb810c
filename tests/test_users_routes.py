from __future__ import annotations

from flask.testing import FlaskClient

from messagely.application.services.session_tokens import SessionIssuer


def test_list_users_requires_authentication(client: FlaskClient, users) -> None:
    assert client.get("/users/").status_code == 401
    assert client.get("/users/?_token=garbage").status_code == 401


def test_list_users(client: FlaskClient, users) -> None:
    response = client.get("/users/", query_string={"_token": users["test1"]})

    assert response.status_code == 200
    assert response.get_json() == {
        "users": [
            {"username": "test1", "first_name": "Test1", "last_name": "Testy1"},
            {"username": "test2", "first_name": "Test2", "last_name": "Testy2"},
            {"username": "test3", "first_name": "Test3", "last_name": "Testy3"},
        ]
    }


def test_get_own_profile(client: FlaskClient, users) -> None:
    response = client.get("/users/test1", query_string={"_token": users["test1"]})

    assert response.status_code == 200
    user = response.get_json()["user"]
    assert set(user) == {"username", "first_name", "last_name", "phone", "join_at", "last_login_at"}
    assert user["username"] == "test1"
    assert user["phone"] == "+14155550000"


def test_get_other_profile_is_unauthorized(client: FlaskClient, users) -> None:
    response = client.get("/users/test1", query_string={"_token": users["test2"]})

    assert response.status_code == 401


def test_get_nonexistent_self_is_not_found(client: FlaskClient, users) -> None:
    ghost = SessionIssuer("test-secret").issue("fakeuser")

    response = client.get("/users/fakeuser", query_string={"_token": ghost})

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"


def test_token_accepted_in_body(client: FlaskClient, users) -> None:
    response = client.get("/users/test1", json={"_token": users["test1"]})

    assert response.status_code == 200


def test_messages_to_and_from(client: FlaskClient, users, message_id: int) -> None:
    to_response = client.get("/users/test2/to", query_string={"_token": users["test2"]})
    from_response = client.get("/users/test1/from", query_string={"_token": users["test1"]})

    assert to_response.status_code == 200
    received = to_response.get_json()["messages"]
    assert len(received) == 1
    assert received[0]["id"] == message_id
    assert received[0]["body"] == "hello world!"
    assert received[0]["read_at"] is None
    assert received[0]["from_user"] == {
        "username": "test1",
        "first_name": "Test1",
        "last_name": "Testy1",
        "phone": "+14155550000",
    }

    sent = from_response.get_json()["messages"]
    assert [m["to_user"]["username"] for m in sent] == ["test2"]
    assert "password" not in sent[0]["to_user"]


def test_messages_of_other_user_are_unauthorized(client: FlaskClient, users) -> None:
    assert client.get("/users/test1/to", query_string={"_token": users["test2"]}).status_code == 401
    assert client.get("/users/test1/from", query_string={"_token": users["test2"]}).status_code == 401
