"""
Date calculation and manipulation service.
Handles calendar-day arithmetic, day ranges and locale week boundaries.
Weekdays are numbered 1 = Sunday ... 7 = Saturday.
"""
from datetime import datetime, timedelta, date
from typing import Iterable, List, Union

from lifetrack.constants import DEFAULT_FIRST_WEEKDAY


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def to_date(value: Union[date, datetime]) -> date:
        """Truncate a datetime to its calendar date (dates pass through)."""
        if isinstance(value, datetime):
            return value.date()
        return value

    @staticmethod
    def normalize_to_midnight(dt: datetime) -> datetime:
        """
        Normalize datetime to midnight (remove time component).

        Args:
            dt: Datetime to normalize

        Returns:
            Datetime set to midnight
        """
        return datetime.combine(dt.date(), datetime.min.time())

    @staticmethod
    def get_day_range(target_date: date) -> tuple[datetime, datetime]:
        """
        Get datetime range for a full day (midnight to midnight).

        Args:
            target_date: Date to get range for

        Returns:
            Tuple of (day_start, day_end) datetimes
        """
        day_start = datetime.combine(target_date, datetime.min.time())
        day_end = datetime.combine(target_date + timedelta(days=1), datetime.min.time())
        return day_start, day_end

    @staticmethod
    def add_days(value: datetime, days: int) -> datetime:
        """Calendar-day arithmetic: same wall-clock time, n days later."""
        return value + timedelta(days=days)

    @staticmethod
    def weekday(target_date: date) -> int:
        """Weekday number with 1 = Sunday ... 7 = Saturday."""
        return target_date.isoweekday() % 7 + 1

    @staticmethod
    def week_start(target_date: date, first_weekday: int = DEFAULT_FIRST_WEEKDAY) -> date:
        """
        First day of the week containing target_date.

        Args:
            target_date: Any day in the week
            first_weekday: Locale first weekday (1 = Sunday, 2 = Monday, ...)

        Returns:
            Date of the week's first day
        """
        offset = (DateService.weekday(target_date) - first_weekday) % 7
        return target_date - timedelta(days=offset)

    @staticmethod
    def week_range(target_date: date, first_weekday: int = DEFAULT_FIRST_WEEKDAY) -> tuple[date, date]:
        """Get (first, last) day of the 7-day week containing target_date."""
        start = DateService.week_start(target_date, first_weekday)
        return start, start + timedelta(days=6)

    @staticmethod
    def week_days(target_date: date, first_weekday: int = DEFAULT_FIRST_WEEKDAY) -> List[date]:
        """All seven days of the week containing target_date, in order."""
        start = DateService.week_start(target_date, first_weekday)
        return [start + timedelta(days=offset) for offset in range(7)]

    @staticmethod
    def month_range(year: int, month: int) -> tuple[date, date]:
        """Get (first, last) day of a calendar month."""
        first = date(year, month, 1)
        if month == 12:
            next_first = date(year + 1, 1, 1)
        else:
            next_first = date(year, month + 1, 1)
        return first, next_first - timedelta(days=1)

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Number of calendar days from start to end (negative if end is earlier)."""
        return (end - start).days

    @staticmethod
    def consecutive_days(days: Iterable[date], as_of: date) -> int:
        """
        Count consecutive calendar days present in days, walking backward
        from as_of. A missing as_of yields 0.
        """
        present = set(days)
        count = 0
        current = as_of
        while current in present:
            count += 1
            current = current - timedelta(days=1)
        return count
