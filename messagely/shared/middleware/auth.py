# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request authorization.

Identity resolution runs before every request and never rejects: a missing or
bad token only means the request carries no identity. Routes then declare an
ordered list of checks with :func:`authorize`; each check either returns (the
request proceeds) or raises :class:`UnauthorizedError`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Protocol

from flask import Flask, g, request

from messagely.domain.messages.entities import MessageDetail
from messagely.domain.users.entities import Identity
from messagely.domain.users.exceptions import InvalidTokenError
from messagely.shared.errors import BadRequestError, UnauthorizedError
from messagely.shared.logging import logger

TOKEN_FIELD = "_token"


class TokenVerifier(Protocol):
    def verify(self, token: str | None) -> Identity: ...


class MessageLookup(Protocol):
    def get(self, message_id: int) -> MessageDetail: ...


@dataclass(slots=True)
class AuthContext:
    identity: Identity | None
    path_params: Mapping[str, Any] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)

    @property
    def username(self) -> str | None:
        return self.identity.username if self.identity else None


Check = Callable[[AuthContext], None]


def extract_token() -> str | None:
    token = request.args.get(TOKEN_FIELD)
    if token:
        return token
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        value = body.get(TOKEN_FIELD)
        if isinstance(value, str):
            return value
    return None


def resolve_identity(verifier: TokenVerifier) -> Identity | None:
    token = extract_token()
    if not token:
        return None
    try:
        return verifier.verify(token)
    except InvalidTokenError as exc:
        logger.debug(f"auth.identity: ignoring token ({exc.message}) on {request.path}")
        return None


def configure_identity_resolution(app: Flask, verifier: TokenVerifier) -> None:
    @app.before_request
    def _resolve_identity() -> None:
        g.identity = resolve_identity(verifier)


def _reject(ctx: AuthContext, reason: str) -> UnauthorizedError:
    logger.warning(f"auth.reject: {reason} user={ctx.username} path={request.path}")
    return UnauthorizedError("Unauthorized")


def require_authenticated(ctx: AuthContext) -> None:
    if ctx.identity is None:
        raise _reject(ctx, "not authenticated")


def require_self(ctx: AuthContext) -> None:
    if ctx.identity is None or ctx.identity.username != ctx.path_params.get("username"):
        raise _reject(ctx, "not the account owner")


class _MessageCheck:
    def __init__(self, messages: MessageLookup) -> None:
        self._messages = messages

    def _load(self, ctx: AuthContext) -> MessageDetail:
        # Lookup happens before the identity comparison: missing messages are 404.
        message_id = ctx.path_params.get("id")
        if not isinstance(message_id, int):
            raise BadRequestError("Message id must be an integer")
        message = self._messages.get(message_id)
        ctx.resources["message"] = message
        return message


class RequireSenderOrRecipient(_MessageCheck):
    def __call__(self, ctx: AuthContext) -> None:
        message = self._load(ctx)
        if ctx.identity is None or not message.is_party(ctx.identity.username):
            raise _reject(ctx, f"not a party to message {message.id}")


class RequireRecipient(_MessageCheck):
    def __call__(self, ctx: AuthContext) -> None:
        message = self._load(ctx)
        if ctx.identity is None or not message.is_recipient(ctx.identity.username):
            raise _reject(ctx, f"not the recipient of message {message.id}")


def current_auth() -> AuthContext:
    ctx = getattr(g, "auth", None)
    if ctx is None:
        ctx = AuthContext(identity=getattr(g, "identity", None))
    return ctx


def authorize(*checks: Check):
    """Run ``checks`` in order before the view; the first rejection wins."""

    def decorator(view):
        @wraps(view)
        def inner(*args, **kwargs):
            ctx = AuthContext(
                identity=getattr(g, "identity", None),
                path_params=dict(request.view_args or {}),
            )
            for check in checks:
                check(ctx)
            g.auth = ctx
            return view(*args, **kwargs)

        return inner

    return decorator


__all__ = [
    "AuthContext",
    "Check",
    "RequireRecipient",
    "RequireSenderOrRecipient",
    "TOKEN_FIELD",
    "authorize",
    "configure_identity_resolution",
    "current_auth",
    "extract_token",
    "require_authenticated",
    "require_self",
    "resolve_identity",
]
