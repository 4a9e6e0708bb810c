# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Message, MessageDetail, MessageListing, ReadReceipt
from .exceptions import MessageNotFoundError

__all__ = [
    "Message",
    "MessageDetail",
    "MessageListing",
    "MessageNotFoundError",
    "ReadReceipt",
]
