"""
Offset resolution and the clock the conversion functions read from.

The only ambient state the package depends on is the current UTC instant and
the host's local UTC offset. Both are read through a Clock so tests can pin
them with FixedClock.
"""

import calendar
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

import pytz

from .errors import IndeterminateOffsetError, InvalidOffsetError

logger = logging.getLogger(__name__)

# +-25:59:59, the widest offset a UtcOffset may hold
MAX_OFFSET_SECONDS = 25 * 3600 + 59 * 60 + 59


class OffsetType(Enum):
    """Which offset a resolved datetime is expressed in."""
    LOCAL = "local"
    UTC = "utc"


@dataclass(frozen=True)
class UtcOffset:
    """
    A validated offset from UTC in whole seconds.

    Construction fails with InvalidOffsetError when the magnitude exceeds
    MAX_OFFSET_SECONDS.
    """
    seconds: int

    def __post_init__(self):
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise InvalidOffsetError(self.seconds, "offset must be an integer number of seconds")
        if abs(self.seconds) > MAX_OFFSET_SECONDS:
            raise InvalidOffsetError(
                self.seconds,
                f"value must be within -{MAX_OFFSET_SECONDS}..{MAX_OFFSET_SECONDS}"
            )

    @classmethod
    def from_seconds(cls, seconds: int) -> 'UtcOffset':
        return cls(seconds)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> 'UtcOffset':
        return cls(int(delta.total_seconds()))

    @property
    def is_utc(self) -> bool:
        return self.seconds == 0

    @property
    def whole_hours(self) -> int:
        """Hours component, truncated toward zero."""
        return int(self.seconds / 3600)

    @property
    def whole_minutes(self) -> int:
        return int(self.seconds / 60)

    def to_tzinfo(self):
        """
        Return a tzinfo usable with datetime.

        Zero maps to pytz.utc. Python datetimes only accept offsets strictly
        inside +-24h, so wider offsets raise InvalidOffsetError here.
        """
        if self.is_utc:
            return pytz.utc
        try:
            return timezone(timedelta(seconds=self.seconds))
        except ValueError as e:
            raise InvalidOffsetError(self.seconds, str(e)) from e

    def __str__(self):
        sign = '-' if self.seconds < 0 else '+'
        hours, rest = divmod(abs(self.seconds), 3600)
        minutes, seconds = divmod(rest, 60)
        return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"


UTC_OFFSET = UtcOffset(0)


class Clock(ABC):
    """
    Source of the current instant and the host's local offset.

    Contract:
    - now_utc() returns an aware datetime in UTC
    - local_offset_at() returns the local offset in effect at the given
      instant, or raises IndeterminateOffsetError
    """

    @abstractmethod
    def now_utc(self) -> datetime:
        ...

    @abstractmethod
    def local_offset_at(self, instant: datetime) -> UtcOffset:
        ...


class SystemClock(Clock):
    """Reads the real wall clock and the host timezone configuration."""

    def now_utc(self) -> datetime:
        return datetime.now(pytz.utc)

    def local_offset_at(self, instant: datetime) -> UtcOffset:
        if instant.tzinfo is None:
            raise IndeterminateOffsetError(instant, "instant has no UTC offset")

        epoch_seconds = calendar.timegm(instant.utctimetuple())
        try:
            local = time.localtime(epoch_seconds)
        except (OverflowError, OSError, ValueError) as e:
            raise IndeterminateOffsetError(instant, str(e)) from e

        gmtoff = getattr(local, 'tm_gmtoff', None)
        if gmtoff is None:
            raise IndeterminateOffsetError(instant, "host does not report a local offset")

        return UtcOffset.from_seconds(int(gmtoff))


class FixedClock(Clock):
    """
    Clock pinned to a given instant and local offset.

    Args:
        now: Instant returned by now_utc(); naive values are taken as UTC
        local_offset: Offset reported for every instant, as a UtcOffset or
            seconds. None simulates a host whose local offset is unknown.
    """

    def __init__(
        self,
        now: datetime,
        local_offset: Optional[Union[UtcOffset, int]] = UTC_OFFSET
    ):
        if now.tzinfo is None:
            now = pytz.utc.localize(now)
        self.now = now.astimezone(pytz.utc)

        if isinstance(local_offset, int):
            local_offset = UtcOffset.from_seconds(local_offset)
        self.local_offset = local_offset

    def now_utc(self) -> datetime:
        return self.now

    def local_offset_at(self, instant: datetime) -> UtcOffset:
        if self.local_offset is None:
            raise IndeterminateOffsetError(instant, "no local offset configured")
        return self.local_offset

    def __repr__(self):
        return f"FixedClock(now={self.now.isoformat()}, local_offset={self.local_offset})"


DEFAULT_CLOCK = SystemClock()


def resolve_offset(
    value: datetime,
    offset_type: OffsetType,
    clock: Optional[Clock] = None
) -> datetime:
    """
    Attach UTC or the host's local offset to a datetime.

    A naive value is taken to be UTC. With OffsetType.LOCAL the same instant
    is re-expressed in the local offset in effect at that instant.

    Args:
        value: datetime to resolve (naive values are assumed UTC)
        offset_type: OffsetType.UTC or OffsetType.LOCAL
        clock: Clock to query for the local offset (default: system clock)

    Returns:
        Timezone-aware datetime

    Raises:
        IndeterminateOffsetError: if the local offset cannot be determined
    """
    if value.tzinfo is None:
        instant = pytz.utc.localize(value)
    else:
        instant = value.astimezone(pytz.utc)

    if offset_type is OffsetType.UTC:
        return instant

    offset = (clock or DEFAULT_CLOCK).local_offset_at(instant)
    try:
        resolved = instant.astimezone(offset.to_tzinfo())
    except (InvalidOffsetError, OverflowError) as e:
        raise IndeterminateOffsetError(instant, str(e)) from e

    logger.debug(f"Resolved {instant.isoformat()} to local offset {offset}")
    return resolved
