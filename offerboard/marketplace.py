"""The per-process marketplace object owning every store."""

from __future__ import annotations

from typing import Optional

from offerboard import database
from offerboard.services.account_service import AccountStore
from offerboard.services.job_service import JobStore
from offerboard.services.notification_service import NotificationSink
from offerboard.services.session_service import SessionManager
from offerboard.settings import Settings
from offerboard.storage import KV_COLLECTION, KeyValueStore, MemoryKeyValueStore, MongoKeyValueStore


def build_kv_store(settings: Settings) -> KeyValueStore:
    """Return the MongoDB store when enabled, otherwise a fresh in-memory one."""
    if settings.enable_mongodb:
        return MongoKeyValueStore(database.get_database()[KV_COLLECTION])
    return MemoryKeyValueStore()


class Marketplace:
    def __init__(self, kv: KeyValueStore, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.kv = kv
        self.accounts = AccountStore(kv, id_start=self.settings.account_id_start)
        self.sessions = SessionManager(kv, self.accounts)
        self.notifications = NotificationSink(kv)
        self.jobs = JobStore(
            kv,
            self.accounts,
            self.notifications,
            allow_status_revision=self.settings.allow_status_revision,
        )

    def clear_accounts(self) -> None:
        """Remove every account and log out.

        Jobs and notifications that mention removed accounts are left in place.
        """
        self.accounts.clear_all()
        self.sessions.logout()
