"""Unit tests for timestamp helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from emunicipality.utils import as_utc, utcnow

pytestmark = pytest.mark.unit


class TestAsUtc:

    def test_none(self):
        assert as_utc(None) is None

    def test_naive_is_taken_as_utc(self):
        assert as_utc(datetime(2026, 1, 1, 12, 0)) == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_offset_is_converted(self):
        plus_two = timezone(timedelta(hours=2))

        converted = as_utc(datetime(2026, 1, 1, 0, 0, tzinfo=plus_two))

        assert converted.tzinfo == timezone.utc
        assert converted.replace(tzinfo=None) == datetime(2025, 12, 31, 22, 0)

    def test_utcnow_is_aware(self):
        assert utcnow().utcoffset() == timedelta(0)
