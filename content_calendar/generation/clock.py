"""Wall-clock and day-boundary helpers in a fixed IANA time zone."""

from datetime import date, datetime, time, timedelta
from typing import Tuple, Union
from zoneinfo import ZoneInfo


class Clock:
    """Provides "now" and local day boundaries for one time zone."""

    def __init__(self, timezone: Union[str, ZoneInfo] = "UTC"):
        self.tz = ZoneInfo(timezone) if isinstance(timezone, str) else timezone

    @property
    def timezone_name(self) -> str:
        return self.tz.key

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()

    def start_of_day(self, value: Union[date, datetime]) -> datetime:
        """Local midnight of the day `value` falls on."""
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(self.tz)
            value = value.date()
        return datetime.combine(value, time.min, tzinfo=self.tz)

    def day_bounds(self, value: Union[date, datetime]) -> Tuple[datetime, datetime]:
        """Half-open [start, end) interval covering the local day of `value`."""
        start = self.start_of_day(value)
        end = self.start_of_day(start.date() + timedelta(days=1))
        return start, end

    def local_datetime(self, year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
        return datetime(year, month, day, hour, minute, tzinfo=self.tz)
