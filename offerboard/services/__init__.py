"""Service layer modules for the OfferBoard marketplace."""

from . import account_service, job_service, notification_service, session_service

__all__ = [
    "account_service",
    "job_service",
    "notification_service",
    "session_service",
]
