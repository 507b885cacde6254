"""/api/jobs routes for creating, answering and removing job offers."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from offerboard.models import Job, RecipientStatus, SessionIdentity
from offerboard.utils.auth import get_marketplace, require_session

bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")


def _user_label(username: str) -> str:
    account = get_marketplace().accounts.find_by_username(username)
    if account is None:
        return f"@{username}"
    return f"{account.name} (@{account.username})"


def _job_view(job: Job, session: SessionIdentity) -> Dict[str, Any]:
    """Serialize a job as seen by the logged-in user."""
    own_status = job.status_for(session.username)
    revisable = get_marketplace().jobs.allow_status_revision
    data = job.to_dict()
    data.update(
        creatorLabel=_user_label(job.creator_username),
        recipientLabels=[_user_label(u) for u in job.recipient_usernames],
        myStatus=own_status.value if own_status else None,
        canRemove=session.id == job.creator_id,
        canRespond=own_status is not None and (revisable or own_status is RecipientStatus.PENDING),
    )
    return data


@bp.post("")
def create_job():
    """Offer a new job to one or more recipients."""
    session = get_marketplace().sessions.current()
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    job = get_marketplace().jobs.create(
        session,
        title=payload.get("title", ""),
        description=payload.get("description", ""),
        job_type=payload.get("type", ""),
        estimated_value=payload.get("estimatedValue"),
        recipients=payload.get("recipients"),
    )
    return jsonify(job=_job_view(job, session)), 201


@bp.get("")
def list_jobs():
    """Return the jobs the logged-in user created or received."""
    session, error_response = require_session()
    if error_response is not None:
        return error_response

    jobs = get_marketplace().jobs.list_visible_to(session.username)
    return jsonify(jobs=[_job_view(job, session) for job in jobs]), 200


def _answer(job_id: str, status: RecipientStatus):
    session, error_response = require_session()
    if error_response is not None:
        return error_response

    job = get_marketplace().jobs.set_status(job_id, session.username, status)
    current_app.logger.info(f"{session.username} {status.value} job {job_id}")
    message = f'You have {status.value} the job: "{job.title}".'
    return jsonify(job=_job_view(job, session), message=message), 200


@bp.post("/<job_id>/accept")
def accept_job(job_id: str):
    return _answer(job_id, RecipientStatus.ACCEPTED)


@bp.post("/<job_id>/reject")
def reject_job(job_id: str):
    return _answer(job_id, RecipientStatus.REJECTED)


@bp.delete("/<job_id>")
def remove_job(job_id: str):
    """Delete a job. Only its creator may do this."""
    session, error_response = require_session()
    if error_response is not None:
        return error_response

    get_marketplace().jobs.remove(job_id, session.id)
    return jsonify(success=True), 200
