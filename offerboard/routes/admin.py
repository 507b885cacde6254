"""Admin utilities for wiping jobs and accounts."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from offerboard.utils.auth import get_marketplace

bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@bp.delete("/jobs")
def clear_jobs():
    """Remove every job for every user."""
    get_marketplace().jobs.clear_all()
    current_app.logger.warning("All jobs cleared via admin endpoint")
    return jsonify(success=True), 200


@bp.delete("/accounts")
def clear_accounts():
    """Remove every account. This also logs out the current user."""
    get_marketplace().clear_accounts()
    current_app.logger.warning("All accounts cleared via admin endpoint")
    return jsonify(success=True), 200


@bp.get("/stats")
def get_stats():
    """Get overall marketplace statistics."""
    marketplace = get_marketplace()
    jobs = marketplace.jobs.all()
    answers = [status for job in jobs for status in job.status.values()]

    stats = {
        "total_accounts": len(marketplace.accounts.all()),
        "total_jobs": len(jobs),
        "pending_answers": sum(1 for s in answers if not s.is_final),
        "final_answers": sum(1 for s in answers if s.is_final),
    }
    return jsonify(stats), 200
