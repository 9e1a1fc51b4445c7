"""
Tests for clock helpers and the 'today' window.
"""

from datetime import datetime, timedelta, timezone

from medstock.core.clock import SystemClock, as_utc, day_window, resolve_timezone


def test_system_clock_is_utc():
    now = SystemClock().now()

    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_as_utc_treats_naive_as_utc():
    naive = datetime(2025, 1, 1, 12, 0, 0)

    assert as_utc(naive) == datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_as_utc_converts_offsets():
    plus_two = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    converted = as_utc(plus_two)

    assert converted == datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert converted.tzinfo == timezone.utc


def test_day_window_utc():
    start, end = day_window(datetime(2025, 3, 14, 15, 30, tzinfo=timezone.utc), timezone.utc)

    assert start == datetime(2025, 3, 14, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 15, tzinfo=timezone.utc)


def test_day_window_uses_local_midnight():
    minus_five = timezone(timedelta(hours=-5))
    # 02:00 UTC on the 15th is still the 14th at UTC-5
    start, end = day_window(datetime(2025, 3, 15, 2, 0, tzinfo=timezone.utc), minus_five)

    assert start == datetime(2025, 3, 14, 5, 0, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 15, 5, 0, tzinfo=timezone.utc)
    assert start.tzinfo == timezone.utc


def test_resolve_utc_without_tz_database():
    assert resolve_timezone("UTC") is timezone.utc
    assert resolve_timezone("utc") is timezone.utc
