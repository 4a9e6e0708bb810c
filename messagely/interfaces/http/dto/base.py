# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import request
from pydantic import BaseModel, ConfigDict, ValidationError

from messagely.shared.errors import BadRequestError
from messagely.shared.errors.validation import raise_validation_error

RequestT = TypeVar("RequestT", bound="RequestDTO")


class RequestDTO(BaseModel):
    # Bodies may also carry the session token field.
    model_config = ConfigDict(extra="ignore")


class ResponseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def parse_body(model: type[RequestT]) -> RequestT:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc)
