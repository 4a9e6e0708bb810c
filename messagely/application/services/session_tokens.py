# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens (JWT carrying the username claim)."""

from __future__ import annotations

from datetime import UTC, datetime

from jose import JWTError, jwt

from messagely.domain.users.entities import Identity
from messagely.domain.users.exceptions import InvalidTokenError


class SessionIssuer:
    def __init__(self, secret_key: str, *, algorithm: str = "HS256") -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue(self, username: str) -> str:
        payload = {"username": username, "iat": int(datetime.now(UTC).timestamp())}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str | None) -> Identity:
        """Decode ``token`` and return the identity it claims.

        Existence of the claimed user is not checked here.
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Missing session token")
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            raise InvalidTokenError("Invalid session token") from exc

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError("Session token has no username claim")
        return Identity(username=username)


__all__ = ["SessionIssuer"]
