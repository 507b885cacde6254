"""Per-user notification lists stored under ``notifications_<username>``."""

from __future__ import annotations

from typing import List

from offerboard.models import Notification
from offerboard.storage import KeyValueStore

NOTIFICATIONS_KEY_PREFIX = "notifications_"


def notifications_key(username: str) -> str:
    return f"{NOTIFICATIONS_KEY_PREFIX}{username}"


class NotificationSink:
    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def append(self, owner_username: str, event: Notification) -> None:
        events = self._load(owner_username)
        events.append(event.to_dict())
        self._kv.save_json(notifications_key(owner_username), events)

    def list(self, owner_username: str) -> List[Notification]:
        return self._kv.load_records(notifications_key(owner_username), Notification.from_dict)

    def clear(self, owner_username: str) -> None:
        """Empty the owner's list; callers pass the logged-in username."""
        self._kv.save_json(notifications_key(owner_username), [])

    def _load(self, owner_username: str) -> list:
        raw = self._kv.load_json(notifications_key(owner_username), [])
        return raw if isinstance(raw, list) else []
