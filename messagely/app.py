# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit

from flask import Flask

from messagely.container import Container
from messagely.infrastructure.db import init_db
from messagely.shared.config import AppConfig, load_config
from messagely.shared.logging import logger, setup_logging
from messagely.shared.middleware.auth import configure_identity_resolution
from messagely.shared.middleware.error_handler import configure_error_handling
from messagely.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    setup_logging(config.log_level, debug_mode=config.debug_logging, log_file=config.log_file)
    init_db(container.engine)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["messagely"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_identity_resolution(app, container.session_issuer)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.messages_controller.as_blueprint())

    atexit.register(container.notification_dispatcher.stop)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
