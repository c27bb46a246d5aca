"""
Date conversions between strings, Unix timestamps and aware datetimes.

All datetimes returned here are timezone-aware, expressed either in UTC or in
the host's local offset at that instant.
"""

import logging
import re
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional

import pytz

from .clock import Clock, OffsetType, UtcOffset, resolve_offset
from .errors import (
    IndeterminateOffsetError,
    InvalidDateFormatError,
    InvalidDateTimeFormatError,
    InvalidTimestampError,
)
from .validation import ensure_utc, validate_not_in_future

logger = logging.getLogger(__name__)

FULL_DATE_FORMAT = '%Y-%m-%d'
DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'

FULL_DATE_PATTERN = re.compile(r'([0-9]{4})-([0-9]{2})-([0-9]{2})')
DATETIME_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}')

MIDNIGHT = time.min
END_OF_DAY = time.max

# Timestamps are signed 64-bit epoch seconds
I64_MIN = -2 ** 63
I64_MAX = 2 ** 63 - 1

EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)


class DateType(Enum):
    """Which end of a calendar day a bare date is expanded to."""
    START = "start"
    END = "end"


def resolve_boundary(day: date, date_type: DateType) -> datetime:
    """
    Expand a calendar date into a naive datetime.

    DateType.START gives midnight, DateType.END the last representable
    instant of the day (23:59:59.999999).
    """
    if date_type is DateType.END:
        return datetime.combine(day, END_OF_DAY)
    return datetime.combine(day, MIDNIGHT)


def build_date(value: str, year: int, month: int, day: int) -> date:
    """Construct a calendar date, reporting invalid combinations against value."""
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormatError(value, str(e)) from e


def parse_full_date(date_str: str) -> date:
    """
    Parse a strict, zero-padded YYYY-MM-DD string into a date.

    Raises:
        InvalidDateFormatError: on any pattern mismatch or invalid calendar date
    """
    match = FULL_DATE_PATTERN.fullmatch(date_str) if isinstance(date_str, str) else None
    if match is None:
        raise InvalidDateFormatError(date_str, "expected YYYY-MM-DD")

    year, month, day = (int(group) for group in match.groups())
    return build_date(date_str, year, month, day)


def parse_to_datetime(
    date_str: str,
    date_type: DateType,
    offset_type: OffsetType = OffsetType.UTC,
    clock: Optional[Clock] = None
) -> datetime:
    """
    Convert a YYYY-MM-DD string into the start or end of that day.

    The resulting datetime must not be in the future.

    Args:
        date_str: Date in YYYY-MM-DD form
        date_type: DateType.START (midnight) or DateType.END (23:59:59.999999)
        offset_type: Express the result in UTC or in the host's local offset
        clock: Clock used for "now" and the local offset (default: system clock)

    Returns:
        Timezone-aware datetime

    Raises:
        InvalidDateFormatError: if date_str is not a valid YYYY-MM-DD date
        IndeterminateOffsetError: if the local offset cannot be determined
        DateInFutureError: if the result lies after the current instant

    Example:
        >>> parse_to_datetime("2025-01-01", DateType.START, OffsetType.UTC)
        datetime.datetime(2025, 1, 1, 0, 0, tzinfo=<UTC>)
    """
    day = parse_full_date(date_str)
    result = resolve_offset(resolve_boundary(day, date_type), offset_type, clock)
    validate_not_in_future(result, clock)
    return result


def parse_datetime_string(
    value: str,
    offset_type: OffsetType = OffsetType.UTC,
    clock: Optional[Clock] = None
) -> datetime:
    """
    Parse a "YYYY-MM-DD HH:MM:SS" string taken to be in UTC.

    Raises:
        InvalidDateTimeFormatError: if value does not match the format
        IndeterminateOffsetError: if the local offset cannot be determined
    """
    if not isinstance(value, str) or DATETIME_PATTERN.fullmatch(value) is None:
        raise InvalidDateTimeFormatError(value)

    try:
        naive = datetime.strptime(value, DATETIME_FORMAT)
    except ValueError as e:
        raise InvalidDateTimeFormatError(value) from e

    return resolve_offset(naive, offset_type, clock)


def timestamp_to_datetime(
    timestamp: int,
    offset_type: OffsetType = OffsetType.UTC,
    clock: Optional[Clock] = None
) -> datetime:
    """
    Convert Unix epoch seconds into an aware datetime.

    Args:
        timestamp: Signed 64-bit seconds since 1970-01-01T00:00:00Z
        offset_type: Express the result in UTC or in the host's local offset
        clock: Clock used for the local offset (default: system clock)

    Returns:
        Timezone-aware datetime

    Raises:
        InvalidTimestampError: if timestamp is not an integer or falls outside
            the representable datetime range (years 1-9999)
        IndeterminateOffsetError: if the local offset cannot be determined

    Example:
        >>> timestamp_to_datetime(1732440896, OffsetType.UTC)
        datetime.datetime(2024, 11, 24, 9, 34, 56, tzinfo=<UTC>)
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise InvalidTimestampError(timestamp, "timestamp must be an integer")
    if not I64_MIN <= timestamp <= I64_MAX:
        raise InvalidTimestampError(timestamp, "value does not fit in a signed 64-bit integer")

    try:
        instant = EPOCH + timedelta(seconds=timestamp)
    except OverflowError as e:
        raise InvalidTimestampError(timestamp, str(e)) from e

    return resolve_offset(instant, offset_type, clock)


def datetime_to_timestamp(dt: datetime) -> int:
    """Return whole Unix epoch seconds for dt, rounding toward the past."""
    return (ensure_utc(dt) - EPOCH) // timedelta(seconds=1)


def datetime_to_date(dt: datetime) -> date:
    """
    Drop the time of day and offset from a datetime.

    The date is the one in dt's own offset.

    Raises:
        IndeterminateOffsetError: if dt is not a timezone-aware datetime
    """
    if not isinstance(dt, datetime):
        raise IndeterminateOffsetError(dt, "expected a timezone-aware datetime")
    if dt.utcoffset() is None:
        raise IndeterminateOffsetError(dt, "datetime is naive")
    return dt.date()


def seconds_to_offset(offset_secs: int) -> UtcOffset:
    """
    Convert an offset expressed in seconds into a UtcOffset.

    Raises:
        InvalidOffsetError: if |offset_secs| exceeds 25:59:59

    Example:
        >>> str(seconds_to_offset(-14400))
        '-04:00:00'
    """
    return UtcOffset.from_seconds(offset_secs)


def offset_of(dt: datetime) -> UtcOffset:
    """Return the UTC offset attached to an aware datetime."""
    delta = dt.utcoffset()
    if delta is None:
        raise IndeterminateOffsetError(dt, "datetime is naive")
    return UtcOffset.from_timedelta(delta)
