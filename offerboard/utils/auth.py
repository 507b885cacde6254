"""Session helpers for the Flask routes."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from flask import current_app, jsonify

from offerboard.errors import NotAuthenticated
from offerboard.models import SessionIdentity


def get_marketplace():
    """Return the marketplace attached to the running app."""
    return current_app.extensions["offerboard"]


def require_session() -> Tuple[Optional[SessionIdentity], Optional[Any]]:
    """Return the logged-in identity, or an error response when nobody is logged in."""
    session = get_marketplace().sessions.current()
    if session is None:
        error = NotAuthenticated()
        return None, (jsonify(error.to_dict()), error.status_code)
    return session, None
