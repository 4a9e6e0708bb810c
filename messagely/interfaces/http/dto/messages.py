from __future__ import annotations

from datetime import datetime

from pydantic import Field

from messagely.domain.messages.entities import MessageListing

from .base import RequestDTO, ResponseDTO
from .users import PartyDTO


class CreateMessageRequestDTO(RequestDTO):
    to_username: str = Field(min_length=1, max_length=64)
    body: str = Field(min_length=1)


class MessageCreatedDTO(ResponseDTO):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime


class MessageDetailDTO(ResponseDTO):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    from_user: PartyDTO
    to_user: PartyDTO


class SentMessageDTO(ResponseDTO):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    to_user: PartyDTO

    @classmethod
    def from_listing(cls, listing: MessageListing) -> "SentMessageDTO":
        return cls(
            id=listing.id,
            body=listing.body,
            sent_at=listing.sent_at,
            read_at=listing.read_at,
            to_user=PartyDTO.model_validate(listing.other_party),
        )


class ReceivedMessageDTO(ResponseDTO):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    from_user: PartyDTO

    @classmethod
    def from_listing(cls, listing: MessageListing) -> "ReceivedMessageDTO":
        return cls(
            id=listing.id,
            body=listing.body,
            sent_at=listing.sent_at,
            read_at=listing.read_at,
            from_user=PartyDTO.model_validate(listing.other_party),
        )


class ReadReceiptDTO(ResponseDTO):
    id: int
    read_at: datetime
