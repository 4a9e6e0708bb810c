from __future__ import annotations

from pydantic import Field

from messagely.domain.users.entities import NewUser

from .base import RequestDTO, ResponseDTO


class RegisterRequestDTO(RequestDTO):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    phone: str = Field(min_length=1, max_length=32)

    def to_domain(self) -> NewUser:
        return NewUser(
            username=self.username,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
        )


class LoginRequestDTO(RequestDTO):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class TokenDTO(ResponseDTO):
    token: str
