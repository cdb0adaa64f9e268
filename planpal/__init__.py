"""Initialize the Flask app and its extensions."""

import os

from flask import Flask, jsonify, send_from_directory
from werkzeug.middleware.proxy_fix import ProxyFix

from .constants import (
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_SUGGESTION_TIMEOUT,
    DEFAULT_TRANSACTION_ATTEMPTS,
)
from .extensions import db, login_manager

DEFAULT_AUTH_TOKEN_MAX_AGE = 60 * 60 * 24 * 7


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL")
        or "sqlite:///" + os.path.join(app.instance_path, "planpal.sqlite"),
        UPLOAD_FOLDER=os.environ.get("UPLOAD_FOLDER")
        or os.path.join(app.instance_path, "uploads"),
        AUTH_TOKEN_MAX_AGE=int(
            os.environ.get("AUTH_TOKEN_MAX_AGE") or DEFAULT_AUTH_TOKEN_MAX_AGE
        ),
        STORE_TRANSACTION_ATTEMPTS=int(
            os.environ.get("STORE_TRANSACTION_ATTEMPTS")
            or DEFAULT_TRANSACTION_ATTEMPTS
        ),
        TMDB_API_KEY=os.environ.get("TMDB_API_KEY"),
        GOOGLE_PLACES_API_KEY=os.environ.get("GOOGLE_PLACES_API_KEY"),
        SUGGESTION_TIMEOUT=float(
            os.environ.get("SUGGESTION_TIMEOUT") or DEFAULT_SUGGESTION_TIMEOUT
        ),
        LLM_API_URL=os.environ.get("LLM_API_URL")
        or "https://api.openai.com/v1/chat/completions",
        LLM_API_KEY=os.environ.get("LLM_API_KEY"),
        LLM_MODEL=os.environ.get("LLM_MODEL") or "gpt-4o-mini",
        LLM_TIMEOUT=float(os.environ.get("LLM_TIMEOUT") or DEFAULT_LLM_TIMEOUT),
    )

    if test_config:
        app.config.update(test_config)

    # Ensure the instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import event as event_bp

    app.register_blueprint(event_bp.bp)

    from . import poll as poll_bp

    app.register_blueprint(poll_bp.bp)

    from . import rewards as rewards_bp

    app.register_blueprint(rewards_bp.bp)

    from . import suggestions as suggestions_bp

    app.register_blueprint(suggestions_bp.bp)

    from . import chat as chat_bp

    app.register_blueprint(chat_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/uploads/<path:filename>")
    def uploaded_file(filename):
        """Serve a stored upload."""
        return send_from_directory(app.config["UPLOAD_FOLDER"], filename)

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return jsonify({"status": "ok"})

    with app.app_context():
        db.create_all()

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
