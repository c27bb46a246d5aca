"""
Parsing of time period strings returned by SDMX-style statistical APIs.

Supported formats, tried in this order:
- full date:  "YYYY-MM-DD" (e.g. "2024-05-31"), resolved to the end of that day
- year-month: "YYYY-MM" (e.g. "2024-05"), first day of the month at midnight
- quarterly:  "YYYY-QN" (e.g. "2024-Q2"), first day of the quarter's starting
  month at midnight

Each grammar either does not recognise the string (the next one is tried),
recognises it and returns a match, or recognises it but finds an invalid
component, which raises immediately. "2024-13" is therefore an error and never
reaches the quarterly grammar.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, Tuple

from .clock import Clock, OffsetType, resolve_offset
from .errors import InvalidDateFormatError, InvalidTimeComponentError, PeriodParseError
from .temporal import FULL_DATE_PATTERN, DateType, build_date, resolve_boundary

logger = logging.getLogger(__name__)

# Starting month of each calendar quarter
QUARTER_START_MONTHS = {
    1: 1,
    2: 4,
    3: 7,
    4: 10,
}

# Years are read as signed 32-bit integers, months and quarters as unsigned bytes
I32_MIN = -2 ** 31
I32_MAX = 2 ** 31 - 1
U8_MAX = 255

SIGNED_PATTERN = re.compile(r'[+-]?[0-9]+')
UNSIGNED_PATTERN = re.compile(r'\+?[0-9]+')


@dataclass(frozen=True)
class PeriodMatch:
    """A period string recognised by one of the grammars."""
    grammar: str
    date: date
    date_type: DateType


def _parse_signed(text: str, low: int = I32_MIN, high: int = I32_MAX) -> Optional[int]:
    if SIGNED_PATTERN.fullmatch(text) is None:
        return None
    value = int(text)
    return value if low <= value <= high else None


def _parse_unsigned(text: str, high: int = U8_MAX) -> Optional[int]:
    if UNSIGNED_PATTERN.fullmatch(text) is None:
        return None
    value = int(text)
    return value if value <= high else None


def _match_full_date(period: str) -> Optional[PeriodMatch]:
    match = FULL_DATE_PATTERN.fullmatch(period)
    if match is None:
        return None

    year, month, day = (int(group) for group in match.groups())
    return PeriodMatch('full_date', build_date(period, year, month, day), DateType.END)


def _match_year_month(period: str) -> Optional[PeriodMatch]:
    year_str, separator, month_str = period.partition('-')
    if not separator:
        return None

    year = _parse_signed(year_str)
    month = _parse_unsigned(month_str)
    if year is None or month is None:
        return None

    if not 1 <= month <= 12:
        raise InvalidDateFormatError(period, f"month {month} is not in the range 1..12")

    return PeriodMatch('year_month', build_date(period, year, month, 1), DateType.START)


def _match_quarter(period: str) -> Optional[PeriodMatch]:
    if len(period) != 7 or period[5] != 'Q':
        return None

    year = _parse_signed(period[0:4])
    if year is None:
        raise InvalidDateFormatError(period, f"invalid year '{period[0:4]}'")

    quarter = _parse_unsigned(period[6])
    if quarter is None:
        raise InvalidDateFormatError(period, f"invalid quarter '{period[6]}'")

    month = QUARTER_START_MONTHS.get(quarter)
    if month is None:
        raise InvalidTimeComponentError(str(quarter))

    return PeriodMatch('quarter', build_date(period, year, month, 1), DateType.START)


PERIOD_GRAMMARS: Tuple[Callable[[str], Optional[PeriodMatch]], ...] = (
    _match_full_date,
    _match_year_month,
    _match_quarter,
)


def match_time_period(period: str) -> PeriodMatch:
    """
    Recognise a period string without resolving it to a datetime.

    Raises:
        InvalidDateFormatError: if a grammar matches but a component is invalid
        InvalidTimeComponentError: if the quarter digit is not 1-4
        PeriodParseError: if no grammar matches
    """
    if isinstance(period, str):
        for grammar in PERIOD_GRAMMARS:
            match = grammar(period)
            if match is not None:
                return match

    raise PeriodParseError(f"Unsupported date format: {period}")


def parse_time_period(
    period: str,
    offset_type: OffsetType = OffsetType.UTC,
    clock: Optional[Clock] = None
) -> datetime:
    """
    Parse a time period string into an aware datetime.

    Full dates resolve to 23:59:59.999999 of that day in the requested
    offset. Year-month and quarterly periods always resolve to midnight UTC
    of their first day, whatever offset_type asks for, so the calendar month
    never shifts. No future-date check is applied.

    Args:
        period: Period in one of the supported formats
        offset_type: Express a full date in UTC or in the host's local offset
        clock: Clock used for the local offset (default: system clock)

    Returns:
        Timezone-aware datetime

    Example:
        >>> parse_time_period("2024-Q2").month
        4
    """
    match = match_time_period(period)
    if match.grammar != 'full_date':
        offset_type = OffsetType.UTC

    result = resolve_offset(resolve_boundary(match.date, match.date_type), offset_type, clock)
    logger.debug(f"Parsed period '{period}' as {match.grammar}: {result.isoformat()}")
    return result
