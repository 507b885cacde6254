"""/api/notifications routes for the logged-in user's acceptance notices."""

from __future__ import annotations

from flask import Blueprint, jsonify

from offerboard.utils.auth import get_marketplace, require_session

bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


@bp.get("")
def list_notifications():
    session, error_response = require_session()
    if error_response is not None:
        return error_response

    events = get_marketplace().notifications.list(session.username)
    return jsonify(notifications=[e.to_dict() for e in events]), 200


@bp.delete("")
def clear_notifications():
    """Empty the logged-in user's own notification list."""
    session, error_response = require_session()
    if error_response is not None:
        return error_response

    get_marketplace().notifications.clear(session.username)
    return jsonify(success=True), 200
