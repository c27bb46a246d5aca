"""Date conversion and validation between strings, timestamps and datetimes."""

from .clock import (
    Clock,
    FixedClock,
    OffsetType,
    SystemClock,
    UtcOffset,
    resolve_offset
)
from .errors import (
    DateInFutureError,
    DateTimeError,
    IndeterminateOffsetError,
    InvalidDateFormatError,
    InvalidDateTimeFormatError,
    InvalidOffsetError,
    InvalidTimeComponentError,
    InvalidTimestampError,
    PeriodParseError
)
from .periods import (
    PeriodMatch,
    match_time_period,
    parse_time_period
)
from .temporal import (
    DateType,
    datetime_to_date,
    datetime_to_timestamp,
    offset_of,
    parse_datetime_string,
    parse_to_datetime,
    resolve_boundary,
    seconds_to_offset,
    timestamp_to_datetime
)
from .validation import (
    ensure_utc,
    validate_not_in_future
)

__all__ = [
    'Clock',
    'FixedClock',
    'OffsetType',
    'SystemClock',
    'UtcOffset',
    'resolve_offset',
    'DateInFutureError',
    'DateTimeError',
    'IndeterminateOffsetError',
    'InvalidDateFormatError',
    'InvalidDateTimeFormatError',
    'InvalidOffsetError',
    'InvalidTimeComponentError',
    'InvalidTimestampError',
    'PeriodParseError',
    'PeriodMatch',
    'match_time_period',
    'parse_time_period',
    'DateType',
    'datetime_to_date',
    'datetime_to_timestamp',
    'offset_of',
    'parse_datetime_string',
    'parse_to_datetime',
    'resolve_boundary',
    'seconds_to_offset',
    'timestamp_to_datetime',
    'ensure_utc',
    'validate_not_in_future'
]
