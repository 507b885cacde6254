"""Flask application setup and blueprint wiring."""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from offerboard.errors import MarketplaceError
from offerboard.marketplace import Marketplace, build_kv_store
from offerboard.routes import register_routes
from offerboard.settings import Settings
from offerboard.storage import KeyValueStore


def register_error_handlers(app: Flask) -> None:
    """Turn marketplace errors into ``{"error", "message"}`` JSON responses."""

    @app.errorhandler(MarketplaceError)
    def _handle_marketplace_error(error: MarketplaceError):
        if error.status_code >= 500:
            app.logger.error(f"{error.code}: {error.message}")
        else:
            app.logger.info(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code


def create_app(
    settings: Optional[Settings] = None,
    kv_store: Optional[KeyValueStore] = None,
) -> Flask:
    """Configure and return the Flask application instance."""
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    settings = settings or Settings.from_env()
    if kv_store is None:
        kv_store = build_kv_store(settings)
        backend = "MongoDB" if settings.enable_mongodb else "in-memory"
        app.logger.info(f"Using {backend} key-value store")

    app.extensions["offerboard"] = Marketplace(kv_store, settings)

    register_error_handlers(app)
    register_routes(app)
    return app
