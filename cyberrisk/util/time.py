"""Timestamp helpers.

Keeps time handling consistent across the persisted state.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)
