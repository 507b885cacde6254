"""Error taxonomy shared by the stores and the HTTP layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class MarketplaceError(Exception):
    """Base class for every recoverable marketplace failure."""

    code = "marketplace_error"
    status_code = 400
    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationFailed(MarketplaceError):
    code = "validation_failed"
    default_message = "Please fill in all fields."


class DuplicateUsername(MarketplaceError):
    code = "duplicate_username"
    status_code = 409
    default_message = "Username is already taken."


class InvalidCredentials(MarketplaceError):
    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid username or password."


class NotAuthenticated(MarketplaceError):
    code = "not_authenticated"
    status_code = 401
    default_message = "You must be logged in to do that."


class UnknownRecipient(MarketplaceError):
    """Raised with every recipient username that did not resolve."""

    code = "unknown_recipient"
    default_message = "Recipient username not found."

    def __init__(self, usernames: List[str], message: Optional[str] = None):
        self.usernames = list(usernames)
        if message is None:
            message = f"Recipient username not found: {', '.join(self.usernames)}."
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["usernames"] = self.usernames
        return payload


class NotARecipient(MarketplaceError):
    code = "not_a_recipient"
    status_code = 403
    default_message = "Only a recipient of this job can respond to it."


class NotCreator(MarketplaceError):
    code = "not_creator"
    status_code = 403
    default_message = "Only the job creator can remove this job."


class NotFound(MarketplaceError):
    code = "not_found"
    status_code = 404
    default_message = "Job not found."


class StatusAlreadyFinal(MarketplaceError):
    code = "status_already_final"
    status_code = 409
    default_message = "You have already responded to this job."


class PersistenceUnavailable(MarketplaceError):
    code = "persistence_unavailable"
    status_code = 503
    default_message = "Storage is currently unavailable."
