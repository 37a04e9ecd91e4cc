"""
Tests for utils.time module - UTC timestamp utilities.

This module tests all time utility functions to ensure:
- All timestamps are timezone-aware (UTC)
- Formats match ISO 8601 with 'Z' suffix
- Request ids are sortable and unique per call
- Proper error handling for naive datetimes
- Deterministic behavior with time mocking (freezegun)
"""

import re
from datetime import UTC, datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from listing_writer.utils.time import (
    request_id_from_timestamp,
    utc_now,
    utc_timestamp,
)

REQUEST_ID_RE = re.compile(r"^req-\d{8}T\d{6}Z-[0-9a-f]{6}$")


class TestUtcNow:
    """Test utc_now() function."""

    def test_has_utc_timezone(self):
        """utc_now() should return timezone-aware UTC datetime."""
        result = utc_now()
        assert result.tzinfo is not None
        assert result.utcoffset() == timedelta(0)

    @freeze_time("2025-11-02 08:30:45")
    def test_frozen_time_returns_expected_datetime(self):
        """utc_now() should honour frozen time."""
        assert utc_now() == datetime(2025, 11, 2, 8, 30, 45, tzinfo=UTC)


class TestUtcTimestamp:
    """Test utc_timestamp() function."""

    @freeze_time("2025-11-02 08:30:45")
    def test_format_is_iso8601_with_z_suffix(self):
        """utc_timestamp() should return YYYY-MM-DDTHH:MM:SSZ."""
        assert utc_timestamp() == "2025-11-02T08:30:45Z"

    @freeze_time("2025-12-31 23:59:59")
    def test_end_of_year_formatting(self):
        """utc_timestamp() should format year boundaries correctly."""
        assert utc_timestamp() == "2025-12-31T23:59:59Z"

    def test_format_length_is_20_characters(self):
        """utc_timestamp() should always be 20 characters."""
        assert len(utc_timestamp()) == 20


class TestRequestIdFromTimestamp:
    """Test request_id_from_timestamp() function."""

    def test_format(self):
        """Request ids look like req-YYYYMMDDTHHMMSSZ-xxxxxx."""
        assert REQUEST_ID_RE.match(request_id_from_timestamp())

    @freeze_time("2025-11-02 08:30:45")
    def test_default_uses_current_time(self):
        """request_id_from_timestamp() should use current time when dt=None."""
        assert request_id_from_timestamp().startswith("req-20251102T083045Z-")

    def test_accepts_timezone_aware_datetime(self):
        """A given aware datetime is used for the timestamp part."""
        dt = datetime(2025, 11, 2, 8, 30, 45, tzinfo=UTC)
        assert request_id_from_timestamp(dt).startswith("req-20251102T083045Z-")

    def test_accepts_non_utc_timezone(self):
        """Any timezone-aware datetime is accepted."""
        dt = datetime(2025, 11, 2, 10, 30, 45, tzinfo=timezone(timedelta(hours=2)))
        assert REQUEST_ID_RE.match(request_id_from_timestamp(dt))

    def test_raises_on_naive_datetime(self):
        """request_id_from_timestamp() should raise ValueError for naive datetime."""
        naive_dt = datetime(2025, 11, 2, 8, 30, 45)
        with pytest.raises(ValueError) as exc_info:
            request_id_from_timestamp(naive_dt)
        assert "timezone-aware" in str(exc_info.value)
        assert "naive datetime" in str(exc_info.value)

    def test_unique_within_same_second(self):
        """Two ids for the same instant differ in the random suffix."""
        dt = datetime(2025, 11, 2, 8, 30, 45, tzinfo=UTC)
        ids = {request_id_from_timestamp(dt) for _ in range(20)}
        assert len(ids) > 1

    def test_chronological_sorting(self):
        """Request ids should sort chronologically by their timestamp part."""
        dt1 = datetime(2025, 11, 1, 10, 0, 0, tzinfo=UTC)
        dt2 = datetime(2025, 11, 2, 10, 0, 0, tzinfo=UTC)

        assert request_id_from_timestamp(dt1) < request_id_from_timestamp(dt2)
