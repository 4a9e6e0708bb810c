# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

SENSITIVE_PATTERNS = [
    # Secrets
    (r"(secret[_-]?key\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-]{8,})(['\"]?)", r"\1***REDACTED***\3"),
    (r"(auth[_-]?token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{16,})(['\"]?)", r"\1***REDACTED***\3"),
    (r"(account[_-]?sid\s*[:=]\s*['\"]?)(AC[a-f0-9]{32})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Session tokens (JWT compact form, ?_token= and token= pairs)
    (r"eyJ[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+", r"***JWT***"),
    (r"(_?token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{16,})(['\"]?)", r"\1***REDACTED***\3"),
    (r"(bearer\s+)([a-zA-Z0-9_\-\.]{16,})", r"\1***REDACTED***", re.IGNORECASE),

    # Passwords
    (r"(password\s*[:=]\s*['\"]?)([^'\"\s,}]{1,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Database URLs with credentials
    (r"(postgres(?:ql)?|mysql)(\+\w+)?://([^:/]+):([^@]+)@", r"\1\2://\3:***REDACTED***@"),

    # Phone numbers
    (r"(phone\s*[:=]\s*['\"]?)(\+?\d{7,15})(['\"]?)", r"\1+***-***-****\3", re.IGNORECASE),
    (r"\+\d{10,15}\b", r"+***-***-****"),
]


def sanitize_message(message: str) -> str:
    sanitized = message

    for pattern_tuple in SENSITIVE_PATTERNS:
        if len(pattern_tuple) == 2:
            pattern, replacement = pattern_tuple
            flags = 0
        else:
            pattern, replacement, flags = pattern_tuple

        sanitized = re.sub(pattern, replacement, sanitized, flags=flags)

    return sanitized


def sanitize_record(record: dict[str, Any]) -> bool:
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
