# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from messagely.shared.errors.base import NotFoundError


class MessageNotFoundError(NotFoundError):
    default_code = "message_not_found"

    def __init__(self, message_id: int) -> None:
        super().__init__(f"No such message: {message_id}", context={"id": message_id})
