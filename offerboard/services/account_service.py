"""Account store: registration, lookup and search over the ``accounts`` blob."""

from __future__ import annotations

import logging
from typing import List, Optional

from offerboard.errors import DuplicateUsername, ValidationFailed
from offerboard.models import Account, AccountFields, MeasurementSet, Profile
from offerboard.settings import DEFAULT_ACCOUNT_ID_START
from offerboard.storage import KeyValueStore
from offerboard.utils.common import hash_password

logger = logging.getLogger(__name__)

ACCOUNTS_KEY = "accounts"
ACCOUNT_ID_COUNTER_KEY = "accountIdCounter"
ACCOUNT_ID_PREFIX = "U"


def requires_measurements(gender: str) -> bool:
    """Only non-male profiles carry a measurement set."""
    return gender.strip().lower() != "male"


def _parse_age(raw_age) -> int:
    try:
        age = int(str(raw_age).strip())
    except ValueError:
        raise ValidationFailed("Age must be a whole number.") from None
    if age < 0:
        raise ValidationFailed("Age cannot be negative.")
    return age


class AccountStore:
    def __init__(self, kv: KeyValueStore, id_start: int = DEFAULT_ACCOUNT_ID_START):
        self._kv = kv
        self._id_start = id_start
        self._accounts: List[Account] = []
        self.load()

    def load(self) -> None:
        """Replace the in-memory accounts with the persisted blob."""
        self._accounts = self._kv.load_records(ACCOUNTS_KEY, Account.from_dict)

    def all(self) -> List[Account]:
        return list(self._accounts)

    def create(self, fields: AccountFields) -> Account:
        """
        Validate and register a new account.

        Raises:
            ValidationFailed: a required field is missing or malformed, or the
                password confirmation does not match
            DuplicateUsername: the username is already registered
        """
        username = fields.username.strip()
        name = fields.name.strip()
        gender = fields.gender.strip()
        required = [username, fields.password, name, gender, str(fields.age).strip()]

        measurements = None
        if gender and requires_measurements(gender):
            measurements = MeasurementSet(
                bust=fields.bust.strip(),
                waist=fields.waist.strip(),
                hips=fields.hips.strip(),
                bra_size=fields.bra_size.strip(),
            )
            required.extend([measurements.bust, measurements.waist, measurements.hips, measurements.bra_size])

        if not all(required):
            raise ValidationFailed()
        if fields.confirm_password is not None and fields.confirm_password != fields.password:
            raise ValidationFailed("Passwords do not match.")
        age = _parse_age(fields.age)

        if self.find_by_username(username) is not None:
            raise DuplicateUsername()

        account = Account(
            id=self._next_id(),
            username=username,
            password_hash=hash_password(fields.password),
            profile=Profile(name=name, gender=gender, age=age, measurements=measurements),
        )
        accounts = self._accounts + [account]
        self._save(accounts)
        self._accounts = accounts
        logger.info("Created account %s (%s)", account.username, account.id)
        return account

    def find_by_username(self, username: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.username == username), None)

    def find_by_id(self, account_id: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.id == account_id), None)

    def search(self, query: str) -> List[Account]:
        """Case-insensitive substring search over usernames and display names."""
        needle = (query or "").strip().lower()
        if not needle:
            return []
        return [
            a for a in self._accounts
            if needle in a.username.lower() or needle in a.name.lower()
        ]

    def clear_all(self) -> None:
        """Remove every account. The id counter keeps counting."""
        self._save([])
        self._accounts = []
        logger.info("Cleared all accounts")

    def _next_id(self) -> str:
        raw = self._kv.get(ACCOUNT_ID_COUNTER_KEY)
        try:
            current = int(raw) if raw is not None else self._id_start
        except ValueError:
            logger.warning("Resetting unreadable account id counter %r", raw)
            current = self._id_start
        self._kv.set(ACCOUNT_ID_COUNTER_KEY, str(current + 1))
        return f"{ACCOUNT_ID_PREFIX}{current}"

    def _save(self, accounts: List[Account]) -> None:
        self._kv.save_json(ACCOUNTS_KEY, [a.to_dict() for a in accounts])
