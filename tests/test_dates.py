#!/usr/bin/env python3
"""
Date Helper Tests

Tests for:
- Timestamp parsing (ISO, Z suffix, epoch, datetime, malformed)
- Duration breakdown
- Progress percentage clamping
"""

import pytest
from datetime import datetime, timedelta, timezone

from access.dates import parse_timestamp, progress_percentage, time_breakdown, TimeBreakdown


class TestParseTimestamp:
    """parse_timestamp never raises and always returns aware UTC"""

    @pytest.mark.parametrize("value,expected", [
        ("2025-07-24T14:00:00+02:00", datetime(2025, 7, 24, 12, 0, tzinfo=timezone.utc)),
        ("2025-07-26 12:00:00+00", datetime(2025, 7, 26, 12, 0, tzinfo=timezone.utc)),
        ("2025-07-26T14:30:00+0230", datetime(2025, 7, 26, 12, 0, tzinfo=timezone.utc)),
        ("2025-08-24T12:00:00.12345+00:00", datetime(2025, 8, 24, 12, 0, 0, 123450, tzinfo=timezone.utc)),
        ("2025-08-24T12:00:00.1234567Z", datetime(2025, 8, 24, 12, 0, 0, 123456, tzinfo=timezone.utc)),
    ])
    def test_iso_with_offset(self, value, expected):
        parsed = parse_timestamp(value)
        assert parsed == expected
        assert parsed.tzinfo == timezone.utc

    def test_z_suffix(self):
        assert parse_timestamp("2025-07-24T12:00:00Z") == datetime(2025, 7, 24, 12, 0, tzinfo=timezone.utc)

    def test_naive_string_is_utc(self):
        assert parse_timestamp("2025-07-24T12:00:00") == datetime(2025, 7, 24, 12, 0, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        parsed = parse_timestamp(datetime(2025, 7, 24, 12, 0))
        assert parsed.tzinfo == timezone.utc

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_absent(self, value):
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize("value", ["not-a-date", "2025-02-30T00:00:00", True, [2025, 7, 24], 1e20])
    def test_malformed_is_absent(self, value):
        assert parse_timestamp(value) is None

    def test_malformed_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            parse_timestamp("yesterday-ish")
        assert "malformed timestamp" in caplog.text


class TestTimeBreakdown:

    def test_full_breakdown(self):
        delta = timedelta(days=2, hours=3, minutes=4, seconds=5, microseconds=999999)
        assert time_breakdown(delta) == TimeBreakdown(2, 3, 4, 5)

    def test_negative_is_zero(self):
        assert time_breakdown(timedelta(seconds=-30)) == TimeBreakdown(0, 0, 0, 0)

    def test_sub_second_is_zero(self):
        assert time_breakdown(timedelta(milliseconds=400)) == TimeBreakdown(0, 0, 0, 0)


class TestProgressPercentage:

    def test_midpoint(self):
        start = datetime(2025, 7, 1, tzinfo=timezone.utc)
        end = start + timedelta(days=2)
        assert progress_percentage(start, end, start + timedelta(days=1)) == 50.0

    def test_clamped(self):
        start = datetime(2025, 7, 1, tzinfo=timezone.utc)
        end = start + timedelta(days=2)
        assert progress_percentage(start, end, start - timedelta(days=1)) == 0.0
        assert progress_percentage(start, end, end + timedelta(days=1)) == 100.0

    def test_zero_length_window(self):
        point = datetime(2025, 7, 1, tzinfo=timezone.utc)
        assert progress_percentage(point, point, point) == 100.0
        assert progress_percentage(point, point, point - timedelta(seconds=1)) == 0.0
