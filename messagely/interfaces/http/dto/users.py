from __future__ import annotations

from datetime import datetime

from .base import ResponseDTO


class UserSummaryDTO(ResponseDTO):
    username: str
    first_name: str
    last_name: str


class UserProfileDTO(ResponseDTO):
    username: str
    first_name: str
    last_name: str
    phone: str
    join_at: datetime
    last_login_at: datetime | None


class PartyDTO(ResponseDTO):
    username: str
    first_name: str
    last_name: str
    phone: str
