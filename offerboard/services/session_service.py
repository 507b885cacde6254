"""The single logged-in identity, persisted under ``loggedInUser``."""

from __future__ import annotations

import hmac
import logging
from typing import Optional

from offerboard.errors import InvalidCredentials
from offerboard.models import SessionIdentity
from offerboard.services.account_service import AccountStore
from offerboard.storage import KeyValueStore
from offerboard.utils.common import hash_password

logger = logging.getLogger(__name__)

SESSION_KEY = "loggedInUser"


class SessionManager:
    def __init__(self, kv: KeyValueStore, accounts: AccountStore):
        self._kv = kv
        self._accounts = accounts

    def login(self, username: str, password: str) -> SessionIdentity:
        """
        Log in with a username and password.

        Unknown usernames and wrong passwords raise the same InvalidCredentials
        so callers cannot tell which one failed.
        """
        account = self._accounts.find_by_username((username or "").strip())
        digest = hash_password(password or "")
        if account is None or not hmac.compare_digest(digest, account.password_hash):
            logger.warning("Rejected login attempt for %r", username)
            raise InvalidCredentials()

        session = SessionIdentity.for_account(account)
        self._kv.save_json(SESSION_KEY, session.to_dict())
        logger.info("Logged in %s", session.username)
        return session

    def logout(self) -> None:
        self._kv.delete(SESSION_KEY)

    def current(self) -> Optional[SessionIdentity]:
        raw = self._kv.load_json(SESSION_KEY, None)
        if not isinstance(raw, dict):
            return None
        try:
            return SessionIdentity.from_dict(raw)
        except KeyError:
            logger.warning("Ignoring malformed session record")
            return None
