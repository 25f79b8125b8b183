"""Tests for Clock day boundaries."""

from datetime import date, datetime, timedelta, timezone

from content_calendar.generation.clock import Clock


class TestDayBounds:
    def test_local_midnight_to_midnight(self):
        clock = Clock("Asia/Kolkata")
        start, end = clock.day_bounds(date(2026, 10, 17))

        assert start == datetime(2026, 10, 17, tzinfo=clock.tz)
        assert end - start == timedelta(days=1)

    def test_aware_datetime_is_converted_to_local_day(self):
        clock = Clock("Asia/Kolkata")
        # 20:00 UTC on the 16th is already the 17th in Kolkata
        start, _ = clock.day_bounds(datetime(2026, 10, 16, 20, 0, tzinfo=timezone.utc))

        assert start.date() == date(2026, 10, 17)

    def test_dst_day_is_23_hours(self):
        clock = Clock("America/New_York")
        start, end = clock.day_bounds(date(2026, 3, 8))

        assert (end.astimezone(timezone.utc) - start.astimezone(timezone.utc)) == timedelta(hours=23)


class TestLocalDatetime:
    def test_carries_zone(self):
        clock = Clock("UTC")
        value = clock.local_datetime(2026, 9, 1, 17)

        assert value.tzinfo is clock.tz
        assert value.hour == 17
        assert clock.timezone_name == "UTC"
