# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from messagely.application.use_cases.users.login_user import LoginUserUseCase
from messagely.application.use_cases.users.register_user import RegisterUserUseCase
from messagely.interfaces.http.dto.auth import LoginRequestDTO, RegisterRequestDTO, TokenDTO
from messagely.interfaces.http.dto.base import parse_body
from messagely.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        dto = parse_body(RegisterRequestDTO)
        user, token = self._register_use_case.execute(dto.to_domain())
        logger.info(f"auth.register: ok username={user.username}")
        return jsonify(TokenDTO(token=token).model_dump()), 200

    def login(self) -> tuple[Response, int]:
        dto = parse_body(LoginRequestDTO)
        token = self._login_use_case.execute(dto.username, dto.password)
        logger.info(f"auth.login: ok username={dto.username}")
        return jsonify(TokenDTO(token=token).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
