"""
Calendar Service - Week navigation and day labels for the day picker.

The time tracking screen shows one week at a time and loads entries for the
selected day; this service works out which days those are.
"""

import datetime
from typing import List, Optional

from timekeeper.domain.models import TrackingPreferences

DAYS_PER_WEEK = 7


class CalendarService:
    """
    Week and day helpers.
    Separated from the entry cache for Separation of Concerns.
    """

    def __init__(self, week_starts_on: int = 0):
        """
        Initialize with the first day of the week.

        Args:
            week_starts_on: 0 for Monday through 6 for Sunday
        """
        if not 0 <= week_starts_on <= 6:
            raise ValueError(f"week_starts_on must be 0..6, got {week_starts_on}")
        self.week_starts_on = week_starts_on

    @classmethod
    def from_preferences(cls, preferences: TrackingPreferences) -> "CalendarService":
        """Calendar using the configured first day of the week"""
        return cls(week_starts_on=preferences.week_starts_on)

    def start_of_week(self, date_obj: datetime.date) -> datetime.date:
        offset = (date_obj.weekday() - self.week_starts_on) % DAYS_PER_WEEK
        return date_obj - datetime.timedelta(days=offset)

    def week_dates(self, anchor: Optional[datetime.date] = None) -> List[datetime.date]:
        """
        Get the seven days of the week containing a date.

        Args:
            anchor: Any day in the week (defaults to today)

        Returns:
            The days in order, starting with the configured first weekday
        """
        first = self.start_of_week(anchor or datetime.date.today())
        return self._days_from(first)

    def previous_week(self, first_day: datetime.date) -> List[datetime.date]:
        """The seven days before first_day"""
        return self._days_from(first_day - datetime.timedelta(days=DAYS_PER_WEEK))

    def next_week(self, first_day: datetime.date) -> List[datetime.date]:
        """The seven days starting a week after first_day"""
        return self._days_from(first_day + datetime.timedelta(days=DAYS_PER_WEEK))

    @staticmethod
    def format_iso(date_obj: datetime.date) -> str:
        """Date as stored and fetched ("2024-01-10")"""
        return date_obj.isoformat()

    @staticmethod
    def display_label(date_obj: datetime.date, today: Optional[datetime.date] = None) -> str:
        """
        Short label for a day button.

        Returns:
            "Today", "Yesterday", or day and month such as "3 Jan"
        """
        today = today or datetime.date.today()
        if date_obj == today:
            return "Today"
        if date_obj == today - datetime.timedelta(days=1):
            return "Yesterday"
        return f"{date_obj.day} {date_obj.strftime('%b')}"

    @staticmethod
    def _days_from(first: datetime.date) -> List[datetime.date]:
        return [first + datetime.timedelta(days=i) for i in range(DAYS_PER_WEEK)]
