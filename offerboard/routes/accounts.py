"""/api/accounts routes for registration, payer search and profiles."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from offerboard.models import AccountFields
from offerboard.utils.auth import get_marketplace

bp = Blueprint("accounts", __name__, url_prefix="/api/accounts")


@bp.post("")
def create_account():
    """Register an account from the sign-up form fields."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    account = get_marketplace().accounts.create(AccountFields.from_payload(payload))
    return jsonify(account=account.to_public_dict()), 201


@bp.get("/search")
def search_accounts():
    """Suggest recipients whose username or name contains ``q``."""
    query = request.args.get("q", "")
    results = get_marketplace().accounts.search(query)
    return jsonify(accounts=[a.to_public_dict() for a in results]), 200


@bp.get("/<account_id>")
def get_account(account_id: str):
    """Return a single account's public profile."""
    account = get_marketplace().accounts.find_by_id(account_id)
    if account is None:
        return jsonify(error="not_found", message="Account not found."), 404
    return jsonify(account=account.to_public_dict()), 200
