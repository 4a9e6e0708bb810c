# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from messagely.application.services.user_directory import UserDirectory
from messagely.interfaces.http.dto.messages import ReceivedMessageDTO, SentMessageDTO
from messagely.interfaces.http.dto.users import UserProfileDTO, UserSummaryDTO
from messagely.shared.middleware.auth import authorize, require_authenticated, require_self


class UsersController:
    def __init__(self, *, directory: UserDirectory) -> None:
        self._directory = directory

    def list_users(self):
        users = [UserSummaryDTO.model_validate(u).model_dump() for u in self._directory.all()]
        return jsonify({"users": users})

    def get_user(self, username: str):
        profile = self._directory.get(username)
        return jsonify({"user": UserProfileDTO.model_validate(profile).model_dump(mode="json")})

    def messages_to(self, username: str):
        messages = [
            ReceivedMessageDTO.from_listing(m).model_dump(mode="json")
            for m in self._directory.messages_to(username)
        ]
        return jsonify({"messages": messages})

    def messages_from(self, username: str):
        messages = [
            SentMessageDTO.from_listing(m).model_dump(mode="json")
            for m in self._directory.messages_from(username)
        ]
        return jsonify({"messages": messages})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/users")
        bp.add_url_rule(
            "/", view_func=authorize(require_authenticated)(self.list_users), methods=["GET"]
        )
        bp.add_url_rule(
            "/<username>", view_func=authorize(require_self)(self.get_user), methods=["GET"]
        )
        bp.add_url_rule(
            "/<username>/to", view_func=authorize(require_self)(self.messages_to), methods=["GET"]
        )
        bp.add_url_rule(
            "/<username>/from",
            view_func=authorize(require_self)(self.messages_from),
            methods=["GET"],
        )
        return bp
