"""Tests for the shared clock."""

from datetime import UTC, timedelta

from calorie_tracker.services.clock import utc_now, utc_today


def test_utc_now_is_timezone_aware() -> None:
    assert utc_now().utcoffset() == timedelta(0)
    assert utc_now().tzinfo is UTC


def test_utc_today_is_the_utc_calendar_day() -> None:
    assert utc_today() in {utc_now().date(), (utc_now() - timedelta(seconds=1)).date()}
