"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask, jsonify

from .accounts import bp as accounts_bp
from .admin import bp as admin_bp
from .auth import bp as auth_bp
from .jobs import bp as jobs_bp
from .notifications import bp as notifications_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(accounts_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(admin_bp)

    @app.get("/")
    def index():
        return jsonify(message="Hello from OfferBoard API"), 200
