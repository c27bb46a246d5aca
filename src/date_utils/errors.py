"""
Exceptions raised by the date conversion and validation functions.

Every error derives from DateTimeError, itself a ValueError, so callers can
catch the whole family or a single kind.
"""

from datetime import datetime
from typing import Optional


class DateTimeError(ValueError):
    """Base class for all date handling errors."""


class InvalidDateFormatError(DateTimeError):
    """A date string does not match its format or has out-of-range components."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Failed to parse date '{value}': {reason}.")


class InvalidDateTimeFormatError(DateTimeError):

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid datetime format. Expected %Y-%m-%d %H:%M:%S, but got '{value}'."
        )


class InvalidTimeComponentError(DateTimeError):
    """A component such as the quarter digit is outside its allowed values."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(f"Invalid time component: {component}.")


class InvalidTimestampError(DateTimeError):

    def __init__(self, timestamp, reason: str):
        self.timestamp = timestamp
        self.reason = reason
        super().__init__(
            f"Failed to convert timestamp '{timestamp}' into datetime: {reason}."
        )


class InvalidOffsetError(DateTimeError):

    def __init__(self, seconds, reason: str):
        self.seconds = seconds
        self.reason = reason
        super().__init__(
            f"Failed to convert offset timestamp '{seconds}' into offset: {reason}"
        )


class IndeterminateOffsetError(DateTimeError):
    """The host could not determine its local UTC offset for an instant."""

    def __init__(self, instant: Optional[datetime], reason: str):
        self.instant = instant
        self.reason = reason
        super().__init__(
            f"Could not determine the local offset at '{instant}': {reason}"
        )


class DateInFutureError(DateTimeError):
    """
    A resolved date lies after the current instant.

    Both the rejected value and the "now" observed by the check are kept so
    callers can report the comparison that failed.
    """

    def __init__(self, value: datetime, now: datetime):
        self.value = value
        self.now = now
        super().__init__(
            f"Provided date '{value}' is in the future: '{value}' > '{now}'."
        )


class PeriodParseError(DateTimeError):

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Parsing failed: {reason}")
