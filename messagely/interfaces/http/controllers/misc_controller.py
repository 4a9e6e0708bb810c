# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify
from sqlalchemy.engine import Engine

from messagely.infrastructure.health import check_database
from messagely.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine) -> None:
        self._engine = engine

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except Exception as exc:  # pragma: no cover
            logger.exception("health: database check failed")
            status["ok"] = False
            status["database"] = f"error: {type(exc).__name__}"
        return jsonify(status), (200 if status["ok"] else 503)
