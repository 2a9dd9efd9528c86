import logging

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import RequestEntityTooLarge

from ipblogs.config import Config
from ipblogs.db import db
from ipblogs.extensions.extensions import jwt, ma
from ipblogs.logging_config import setup_logging
from ipblogs.middleware.auth import register_token_handlers
from ipblogs.services.media_uploader import MEDIA_UPLOADER_KEY, MinioMediaUploader


logger = logging.getLogger(__name__)


def _register_error_handlers(app):
    @app.errorhandler(RequestEntityTooLarge)
    def payload_too_large(error):
        return jsonify({"msg": "Request body too large"}), 400

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        logger.exception("Unhandled database error")
        return jsonify({"msg": "Database error", "error": str(error)}), 500


def create_app(config_overrides=None, media_uploader=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    setup_logging(app)

    db.init_app(app)
    jwt.init_app(app)
    register_token_handlers(jwt)
    ma.init_app(app)

    if media_uploader is None:
        media_uploader = MinioMediaUploader(app.config)
    app.extensions[MEDIA_UPLOADER_KEY] = media_uploader

    from ipblogs.routes.auth_routes import auth_bp
    from ipblogs.routes.main_routes import main_bp
    from ipblogs.routes.post_routes import post_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(post_bp)
    _register_error_handlers(app)

    from ipblogs.models import attachment_model, post_model, user_model  # noqa: F401

    with app.app_context():
        db.create_all()

    return app
