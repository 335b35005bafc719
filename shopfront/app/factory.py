from __future__ import annotations

from flask import Flask, render_template
from werkzeug.exceptions import HTTPException

from shopfront.app.config import Config
from shopfront.app.extensions import db, migrate, cors
from shopfront.app.common.errors import ClientError, ConfigurationError
from shopfront.app.common.request_context import REQUEST_ID_HEADER, configure_logging, current_request_id, init_request_id
from shopfront.app.api.register import register_client_blueprints
from shopfront.app.cli import cli_bp


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    @app.after_request
    def _after_request(response):
        rid = current_request_id()
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        return response

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_client_blueprints(app)

    # CLI (flask seed)
    app.register_blueprint(cli_bp)

    def error_page(status: int, code: str, message: str):
        return (
            render_template(
                "error.html", status=status, code=code, message=message, request_id=current_request_id()
            ),
            status,
        )

    # Error handlers
    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(err: ConfigurationError):
        app.logger.exception("Invalid configuration: %s %s", err.message, err.details or {})
        return error_page(err.status_code, err.code, "The shop is not configured correctly")

    @app.errorhandler(ClientError)
    def handle_client_error(err: ClientError):
        db.session.rollback()
        return error_page(err.status_code, err.code, err.message)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_page(err.code or 500, "http_error", err.description or err.name)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        db.session.rollback()
        return error_page(500, "internal_error", "Internal server error")

    return app
