# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from messagely.domain.messages.entities import Message, MessageDetail, ReadReceipt
from messagely.domain.messages.exceptions import MessageNotFoundError
from messagely.domain.messages.repositories import MessageRepository
from messagely.shared.logging import logger


class MessageStore:
    def __init__(self, *, messages: MessageRepository) -> None:
        self._messages = messages

    def create(self, from_username: str, to_username: str, body: str) -> Message:
        message = self._messages.add(from_username, to_username, body, datetime.now(UTC))
        logger.info(
            f"messages.create: id={message.id} from={from_username} to={to_username}"
        )
        return message

    def get(self, message_id: int) -> MessageDetail:
        detail = self._messages.get_detail(message_id)
        if detail is None:
            raise MessageNotFoundError(message_id)
        return detail

    def mark_read(self, message_id: int) -> ReadReceipt:
        """Stamp ``read_at``; an already-read message keeps its first timestamp."""
        receipt = self._messages.mark_read(message_id, datetime.now(UTC))
        if receipt is None:
            raise MessageNotFoundError(message_id)
        return receipt
