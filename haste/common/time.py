"""
Time Utilities

Expiration deadlines are stored as integer UNIX timestamps (UTC seconds),
the same representation in every backend that tracks them itself.
"""

from __future__ import annotations

import time
from typing import Optional


def unix_now() -> int:
    """Return current UNIX time in whole seconds."""
    return int(time.time())


def expiry_deadline(expire: Optional[int], now: Optional[int] = None) -> Optional[int]:
    """
    Compute the UNIX deadline for a document written now.

    Returns `None` (never expires) when `expire` is unset.
    """
    if not expire:
        return None
    if now is None:
        now = unix_now()
    return now + expire


def is_expired(deadline: Optional[int], now: Optional[int] = None) -> bool:
    """Whether a stored deadline has passed. `None` never expires."""
    if deadline is None:
        return False
    if now is None:
        now = unix_now()
    return deadline <= now
