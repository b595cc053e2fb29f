"""Tests for display formatting helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from modelbench.processing.formatting import format_file_size, format_timestamp, format_upload_age

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestFormatFileSize:
    @pytest.mark.parametrize("num_bytes,expected", [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (10_485_760, "10 MB"),
        (1024 ** 3, "1 GB"),
        (5 * 1024 ** 4, "5120 GB"),
    ])
    def test_sizes(self, num_bytes, expected):
        assert format_file_size(num_bytes) == expected


class TestFormatUploadAge:
    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=5), "less than a minute ago"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=12), "12 minutes ago"),
        (timedelta(hours=1), "about 1 hour ago"),
        (timedelta(hours=5), "about 5 hours ago"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=90), "about 3 months ago"),
        (timedelta(days=800), "about 2 years ago"),
    ])
    def test_relative(self, delta, expected):
        assert format_upload_age(NOW - delta, now=NOW) == expected

    def test_future_timestamps_clamp(self):
        assert format_upload_age(NOW + timedelta(minutes=5), now=NOW) == "less than a minute ago"


def test_format_timestamp_includes_zone():
    assert format_timestamp(NOW) == "2024-05-01 12:00:00 UTC"
