"""Job store: offers from one creator to one or more recipients.

Every recipient has an independent status entry that starts as ``pending``.
Only that recipient may answer, and only the creator may remove the job.
Accepting notifies the creator.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, List, Optional, Union

from offerboard.errors import (
    NotARecipient,
    NotAuthenticated,
    NotCreator,
    NotFound,
    StatusAlreadyFinal,
    UnknownRecipient,
    ValidationFailed,
)
from offerboard.models import Job, Notification, RecipientStatus, SessionIdentity
from offerboard.services.account_service import AccountStore
from offerboard.services.notification_service import NotificationSink
from offerboard.storage import KeyValueStore
from offerboard.utils.common import now_iso, now_millis

logger = logging.getLogger(__name__)

JOBS_KEY = "jobs"


def _text_field(value) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationFailed("Title, description and type must be text.")
    return value.strip()


def normalize_recipients(recipients: Union[str, Iterable[str], None]) -> List[str]:
    """Split, trim and de-duplicate recipient usernames, keeping entry order."""
    if recipients is None:
        return []
    if isinstance(recipients, str):
        recipients = recipients.split(",")
    elif not isinstance(recipients, (list, tuple)):
        raise ValidationFailed("Recipients must be a list of usernames.")
    seen: List[str] = []
    for raw in recipients:
        if not isinstance(raw, str):
            raise ValidationFailed("Recipients must be a list of usernames.")
        username = raw.strip()
        if username and username not in seen:
            seen.append(username)
    return seen


def parse_estimated_value(raw) -> Union[int, float]:
    if isinstance(raw, bool):
        raise ValidationFailed("Estimated value must be a number.")
    if isinstance(raw, (int, float)):
        value = raw
    else:
        text = str(raw).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise ValidationFailed("Estimated value must be a number.") from None
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationFailed("Estimated value must be a finite number.")
    if value < 0:
        raise ValidationFailed("Estimated value cannot be negative.")
    return value


class JobStore:
    def __init__(
        self,
        kv: KeyValueStore,
        accounts: AccountStore,
        notifications: NotificationSink,
        allow_status_revision: bool = False,
    ):
        self._kv = kv
        self._accounts = accounts
        self._notifications = notifications
        self.allow_status_revision = allow_status_revision
        self._jobs: List[Job] = []
        self.load()

    def load(self) -> None:
        """Replace the in-memory jobs with the persisted blob."""
        self._jobs = self._kv.load_records(JOBS_KEY, Job.from_dict)

    def create(
        self,
        creator: Optional[SessionIdentity],
        title: str,
        description: str,
        job_type: str,
        estimated_value,
        recipients: Union[str, Iterable[str], None],
    ) -> Job:
        """
        Create a job offered by ``creator`` to every username in ``recipients``.

        Raises:
            NotAuthenticated: nobody is logged in
            ValidationFailed: a field is empty or the value is not a non-negative number
            UnknownRecipient: one or more usernames have no account (all are listed)
        """
        if creator is None:
            raise NotAuthenticated("You must be logged in to create a job.")

        title = _text_field(title)
        description = _text_field(description)
        job_type = _text_field(job_type)
        usernames = normalize_recipients(recipients)
        if not title or not description or not job_type or not usernames:
            raise ValidationFailed()
        if estimated_value is None or str(estimated_value).strip() == "":
            raise ValidationFailed()
        value = parse_estimated_value(estimated_value)

        unknown = [u for u in usernames if self._accounts.find_by_username(u) is None]
        if unknown:
            raise UnknownRecipient(unknown)

        job = Job(
            id=self._next_id(),
            title=title,
            description=description,
            type=job_type,
            estimated_value=value,
            creator_id=creator.id,
            creator_username=creator.username,
            recipient_usernames=usernames,
            status={u: RecipientStatus.PENDING for u in usernames},
            created_at=now_iso(),
        )
        self._commit(self._jobs + [job])
        logger.info("%s created job %s for %s", creator.username, job.id, ", ".join(usernames))
        return job

    def all(self) -> List[Job]:
        return list(self._jobs)

    def get(self, job_id: str) -> Job:
        for job in self._jobs:
            if job.id == job_id:
                return job
        raise NotFound()

    def list_visible_to(self, username: str) -> List[Job]:
        return [job for job in self._jobs if job.is_visible_to(username)]

    def set_status(self, job_id: str, acting_username: str, new_status) -> Job:
        """
        Record ``acting_username``'s answer to a job.

        Raises:
            ValidationFailed: ``new_status`` is not accepted or rejected
            NotFound: no job has that id
            NotARecipient: the acting user is not a recipient of the job
            StatusAlreadyFinal: the user already answered and revisions are off
            PersistenceUnavailable: a write failed

        The job blob is written before the creator's notification. If the
        notification write fails the answer stays recorded and the error still
        propagates; the two blobs are not written as one unit.
        """
        try:
            status = RecipientStatus(new_status)
        except ValueError:
            raise ValidationFailed(f"Unsupported status: {new_status!r}.") from None
        if status is RecipientStatus.PENDING:
            raise ValidationFailed("A job can only be accepted or rejected.")

        job = self.get(job_id)
        previous = job.status_for(acting_username)
        if previous is None:
            raise NotARecipient()
        if previous is status:
            if self.allow_status_revision:
                return job
            raise StatusAlreadyFinal()
        if previous.is_final and not self.allow_status_revision:
            raise StatusAlreadyFinal()

        updated = replace(job, status={**job.status, acting_username: status})
        self._commit([updated if j.id == job_id else j for j in self._jobs])
        logger.info("%s %s job %s", acting_username, status.value, job_id)

        if status is RecipientStatus.ACCEPTED:
            self._notifications.append(
                updated.creator_username,
                Notification(job_title=updated.title, recipient=acting_username, time=now_iso()),
            )
        return updated

    def remove(self, job_id: str, acting_id: str) -> None:
        """Delete a job; only its creator may do so, whatever the recipients answered."""
        job = self.get(job_id)
        if job.creator_id != acting_id:
            raise NotCreator()
        self._commit([j for j in self._jobs if j.id != job_id])
        logger.info("Removed job %s", job_id)

    def clear_all(self) -> None:
        self._commit([])
        logger.info("Cleared all jobs")

    def _next_id(self) -> str:
        # Millisecond timestamps, bumped past the newest id on collision.
        numeric_ids = [int(j.id) for j in self._jobs if j.id.isdigit()]
        candidate = now_millis()
        if numeric_ids:
            candidate = max(candidate, max(numeric_ids) + 1)
        return str(candidate)

    def _commit(self, jobs: List[Job]) -> None:
        # Memory only changes once the blob is written.
        self._kv.save_json(JOBS_KEY, [j.to_dict() for j in jobs])
        self._jobs = jobs
