# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from messagely.application.services.message_store import MessageStore
from messagely.domain.messages.entities import Message
from messagely.domain.messages.repositories import NotificationPort
from messagely.infrastructure.notifications import NotificationDispatcher
from messagely.interfaces.http.dto.base import parse_body
from messagely.interfaces.http.dto.messages import (
    CreateMessageRequestDTO,
    MessageCreatedDTO,
    MessageDetailDTO,
    ReadReceiptDTO,
)
from messagely.shared.logging import logger
from messagely.shared.middleware.auth import (
    RequireRecipient,
    RequireSenderOrRecipient,
    authorize,
    current_auth,
    require_authenticated,
)


def notification_text(message: Message) -> str:
    return f"{message.from_username} says to {message.to_username}: {message.body}"


class MessagesController:
    def __init__(
        self,
        *,
        store: MessageStore,
        notifier: NotificationPort,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._dispatcher = dispatcher

    def get_message(self, id: int):  # noqa: A002
        message = current_auth().resources.get("message") or self._store.get(id)
        return jsonify({"message": MessageDetailDTO.model_validate(message).model_dump(mode="json")})

    def create_message(self):
        dto = parse_body(CreateMessageRequestDTO)
        sender = current_auth().username
        message = self._store.create(sender, dto.to_username, dto.body)

        self._dispatcher.dispatch(self._notifier.send_sms(notification_text(message)))
        logger.debug(f"messages.create: notification queued id={message.id}")

        return jsonify({"message": MessageCreatedDTO.model_validate(message).model_dump(mode="json")})

    def mark_read(self, id: int):  # noqa: A002
        receipt = self._store.mark_read(id)
        logger.info(f"messages.read: id={receipt.id} by={current_auth().username}")
        return jsonify({"message": ReadReceiptDTO.model_validate(receipt).model_dump(mode="json")})

    def as_blueprint(self) -> Blueprint:
        party_only = authorize(RequireSenderOrRecipient(self._store))
        recipient_only = authorize(RequireRecipient(self._store))

        bp = Blueprint("messages", __name__, url_prefix="/messages")
        bp.add_url_rule(
            "/", view_func=authorize(require_authenticated)(self.create_message), methods=["POST"]
        )
        bp.add_url_rule("/<int:id>", view_func=party_only(self.get_message), methods=["GET"])
        bp.add_url_rule(
            "/<int:id>/read", view_func=recipient_only(self.mark_read), methods=["POST"]
        )
        return bp
