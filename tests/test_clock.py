"""
Unit tests for offsets, clocks and offset resolution.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest import mock

import pytz

from date_utils import (
    FixedClock,
    IndeterminateOffsetError,
    InvalidOffsetError,
    OffsetType,
    SystemClock,
    UtcOffset,
    resolve_offset,
)


class TestUtcOffset(unittest.TestCase):

    def test_limits(self):
        self.assertEqual(UtcOffset(93599).seconds, 93599)

        with self.assertRaises(InvalidOffsetError):
            UtcOffset(93600)
        with self.assertRaises(InvalidOffsetError):
            UtcOffset.from_seconds(-93600)

    def test_rejects_non_integers(self):
        for value in [1.5, True, "3600"]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidOffsetError):
                    UtcOffset(value)

    def test_components(self):
        offset = UtcOffset.from_timedelta(timedelta(hours=5, minutes=30))

        self.assertEqual(offset.whole_hours, 5)
        self.assertEqual(offset.whole_minutes, 330)
        self.assertEqual(str(offset), "+05:30:00")
        self.assertFalse(offset.is_utc)

    def test_to_tzinfo(self):
        self.assertIs(UtcOffset(0).to_tzinfo(), pytz.utc)
        self.assertEqual(UtcOffset(-14400).to_tzinfo(), timezone(timedelta(hours=-4)))

    def test_offset_beyond_a_day_cannot_be_attached(self):
        """Valid as a value, but no datetime can carry it."""
        offset = UtcOffset(90000)

        with self.assertRaises(InvalidOffsetError):
            offset.to_tzinfo()


class TestFixedClock(unittest.TestCase):

    def test_naive_now_is_utc(self):
        clock = FixedClock(datetime(2025, 1, 1, 12, 0))

        self.assertEqual(clock.now_utc(), datetime(2025, 1, 1, 12, 0, tzinfo=pytz.utc))

    def test_integer_local_offset(self):
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=pytz.utc), local_offset=-18000)

        self.assertEqual(clock.local_offset_at(clock.now), UtcOffset(-18000))

    def test_unknown_local_offset(self):
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=pytz.utc), local_offset=None)

        with self.assertRaises(IndeterminateOffsetError):
            clock.local_offset_at(clock.now)


class TestSystemClock(unittest.TestCase):
    """The system clock depends on the host, so failures are simulated."""

    def test_now_is_aware_utc(self):
        now = SystemClock().now_utc()

        self.assertEqual(now.utcoffset(), timedelta(0))

    def test_local_offset_is_valid(self):
        offset = SystemClock().local_offset_at(datetime(2024, 6, 1, tzinfo=pytz.utc))

        self.assertIsInstance(offset, UtcOffset)

    def test_localtime_failure(self):
        with mock.patch('date_utils.clock.time.localtime', side_effect=OSError("restricted")):
            with self.assertRaises(IndeterminateOffsetError) as ctx:
                SystemClock().local_offset_at(datetime(2024, 6, 1, tzinfo=pytz.utc))

        self.assertIn("restricted", ctx.exception.reason)

    def test_missing_gmtoff(self):
        with mock.patch('date_utils.clock.time.localtime', return_value=mock.Mock(spec=[])):
            with self.assertRaises(IndeterminateOffsetError):
                SystemClock().local_offset_at(datetime(2024, 6, 1, tzinfo=pytz.utc))

    def test_naive_instant(self):
        with self.assertRaises(IndeterminateOffsetError):
            SystemClock().local_offset_at(datetime(2024, 6, 1))


class TestResolveOffset(unittest.TestCase):

    def test_naive_is_assumed_utc(self):
        result = resolve_offset(datetime(2024, 6, 1, 12), OffsetType.UTC)

        self.assertEqual(result, datetime(2024, 6, 1, 12, tzinfo=pytz.utc))
        self.assertIs(result.tzinfo, pytz.utc)

    def test_aware_input_is_normalised(self):
        aware = datetime(2024, 6, 1, 12, tzinfo=timezone(timedelta(hours=3)))

        result = resolve_offset(aware, OffsetType.UTC)

        self.assertEqual(result.hour, 9)
        self.assertEqual(result, aware)

    def test_local_uses_clock(self):
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=pytz.utc), local_offset=-25200)

        result = resolve_offset(datetime(2024, 6, 1, 12), OffsetType.LOCAL, clock=clock)

        self.assertEqual(result.hour, 5)
        self.assertEqual(result.utcoffset(), timedelta(hours=-7))

    def test_local_with_system_clock_keeps_instant(self):
        naive = datetime(2024, 6, 1, 12)

        result = resolve_offset(naive, OffsetType.LOCAL)

        self.assertEqual(result, resolve_offset(naive, OffsetType.UTC))

    def test_local_failure_is_not_defaulted(self):
        with mock.patch('date_utils.clock.time.localtime', side_effect=OverflowError("out of range")):
            with self.assertRaises(IndeterminateOffsetError):
                resolve_offset(datetime(2024, 6, 1, 12), OffsetType.LOCAL)

    def test_offset_wider_than_a_day_is_indeterminate(self):
        """A host offset no datetime can carry is reported like any other lookup failure."""
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=pytz.utc), local_offset=90000)

        with self.assertRaises(IndeterminateOffsetError) as ctx:
            resolve_offset(datetime(2024, 6, 1, 12), OffsetType.LOCAL, clock=clock)

        self.assertIsInstance(ctx.exception.__cause__, InvalidOffsetError)


if __name__ == '__main__':
    unittest.main()
