"""/api/auth routes for logging in and out."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from offerboard.utils.auth import get_marketplace

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@bp.post("/login")
def login():
    """Check the credentials and make the account the logged-in identity."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    username = str(payload.get("username") or "").strip()
    password = str(payload.get("password") or "")

    session = get_marketplace().sessions.login(username, password)
    current_app.logger.info(f"Logged in as {session.username}")

    return jsonify(user=session.to_dict()), 200


@bp.post("/logout")
def logout():
    """Forget the logged-in identity. Safe to call when nobody is logged in."""
    get_marketplace().sessions.logout()
    return jsonify(success=True), 200


@bp.get("/session")
def get_session_info():
    """Return the logged-in identity, or null."""
    session = get_marketplace().sessions.current()
    return jsonify(user=session.to_dict() if session else None), 200
