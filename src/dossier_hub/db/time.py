# src/dossier_hub/db/time.py
"""Time and identifier utilities for stored documents."""

import time
from datetime import UTC, datetime
from threading import Lock

_LAST_ID = 0
_ID_LOCK = Lock()


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def utc_isoformat() -> str:
    """Return the current UTC time as an ISO-8601 string with a ``Z`` suffix."""
    return utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_ms() -> int:
    """Return the current epoch time in milliseconds."""
    return int(time.time() * 1000)


def next_id() -> int:
    """Return a creation-time identifier that is strictly increasing in-process.

    Two records created within the same millisecond still receive distinct,
    ordered identifiers.
    """
    global _LAST_ID
    with _ID_LOCK:
        _LAST_ID = max(now_ms(), _LAST_ID + 1)
        return _LAST_ID
