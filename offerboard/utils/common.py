"""Password digest and clock helpers shared by the stores."""

from __future__ import annotations

import hashlib
import time
from datetime import datetime, timezone


def now_millis() -> int:
    """Return the current UNIX timestamp in milliseconds."""
    return int(time.time() * 1000)


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def hash_password(password: str) -> str:
    """Return the hex SHA-256 digest stored in place of a password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()
