# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Message, MessageDetail, ReadReceipt


class MessageRepository(Protocol):
    def add(self, from_username: str, to_username: str, body: str, sent_at: datetime) -> Message: ...
    def get_detail(self, message_id: int) -> MessageDetail | None: ...
    def mark_read(self, message_id: int, when: datetime) -> ReadReceipt | None: ...


class NotificationPort(Protocol):
    async def send_sms(self, body: str) -> None: ...
