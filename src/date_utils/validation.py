"""
Validation of resolved datetimes.

The future-date guard compares a resolved datetime against the "now" read
from a Clock at check time.
"""

import logging
from datetime import datetime
from typing import Optional

import pytz

from .clock import Clock, DEFAULT_CLOCK
from .errors import DateInFutureError

logger = logging.getLogger(__name__)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime object is timezone-aware in UTC.

    Args:
        dt: datetime object (naive or aware)

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: if dt is None
    """
    if dt is None:
        raise ValueError("Datetime cannot be None")

    if dt.tzinfo is None:
        logger.warning(f"Converting naive datetime {dt} to UTC")
        return pytz.utc.localize(dt)

    return dt.astimezone(pytz.utc)


def validate_not_in_future(dt: datetime, clock: Optional[Clock] = None) -> datetime:
    """
    Reject a datetime that lies after the current instant.

    "Now" is read from the clock once per call. A datetime equal to now is
    accepted.

    Args:
        dt: datetime to check (naive values are assumed UTC)
        clock: Clock providing now_utc() (default: system clock)

    Returns:
        dt unchanged

    Raises:
        DateInFutureError: if dt is strictly later than now
    """
    now = (clock or DEFAULT_CLOCK).now_utc()

    if ensure_utc(dt) > now:
        raise DateInFutureError(dt, now)

    return dt
