"""Environment-driven settings for the marketplace."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MONGODB_URI = "mongodb://localhost:27017/"
DEFAULT_MONGODB_DATABASE = "offerboard"
DEFAULT_ACCOUNT_ID_START = 1000


def _env_flag(name: str, default: bool = False) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() == "true"


@dataclass
class Settings:
    # MONGODB_URI and MONGODB_DATABASE are read by offerboard.database.
    enable_mongodb: bool = False
    # When false a recipient's accept/reject answer is final.
    allow_status_revision: bool = False
    account_id_start: int = DEFAULT_ACCOUNT_ID_START

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment (call load_dotenv() first)."""
        raw_start = os.getenv("ACCOUNT_ID_START", "").strip()
        return cls(
            enable_mongodb=_env_flag("ENABLE_MONGODB"),
            allow_status_revision=_env_flag("ALLOW_STATUS_REVISION"),
            account_id_start=int(raw_start) if raw_start else DEFAULT_ACCOUNT_ID_START,
        )
