"""
Tests for week navigation and day labels.
"""

import datetime
import pytest
from timekeeper.domain.models import TrackingPreferences
from timekeeper.services.calendar_service import CalendarService

WEDNESDAY = datetime.date(2024, 1, 10)


class TestWeeks:
    def test_week_starts_on_monday_by_default(self):
        days = CalendarService().week_dates(WEDNESDAY)

        assert days[0] == datetime.date(2024, 1, 8)
        assert days[-1] == datetime.date(2024, 1, 14)
        assert len(days) == 7

    def test_week_starting_on_sunday(self):
        days = CalendarService(week_starts_on=6).week_dates(WEDNESDAY)

        assert days[0] == datetime.date(2024, 1, 7)
        assert days[0].weekday() == 6
        assert days[-1] == datetime.date(2024, 1, 13)

    def test_anchor_on_first_day(self):
        monday = datetime.date(2024, 1, 8)
        assert CalendarService().week_dates(monday)[0] == monday

    def test_previous_and_next_week(self):
        service = CalendarService()
        monday = datetime.date(2024, 1, 8)

        assert service.previous_week(monday)[0] == datetime.date(2024, 1, 1)
        assert service.next_week(monday)[0] == datetime.date(2024, 1, 15)
        assert service.next_week(monday)[-1] == datetime.date(2024, 1, 21)

    def test_week_across_year_boundary(self):
        days = CalendarService().week_dates(datetime.date(2024, 1, 1))
        assert days == [datetime.date(2024, 1, 1) + datetime.timedelta(days=i) for i in range(7)]
        assert CalendarService().week_dates(datetime.date(2023, 12, 31))[0] == datetime.date(2023, 12, 25)

    @pytest.mark.parametrize("week_starts_on", [-1, 7])
    def test_invalid_first_weekday(self, week_starts_on):
        with pytest.raises(ValueError):
            CalendarService(week_starts_on=week_starts_on)


class TestLabels:
    def test_today_and_yesterday(self):
        assert CalendarService.display_label(WEDNESDAY, today=WEDNESDAY) == "Today"
        assert CalendarService.display_label(datetime.date(2024, 1, 9), today=WEDNESDAY) == "Yesterday"

    def test_other_days_show_day_and_month(self):
        assert CalendarService.display_label(datetime.date(2024, 1, 3), today=WEDNESDAY) == "3 Jan"
        assert CalendarService.display_label(datetime.date(2024, 1, 11), today=WEDNESDAY) == "11 Jan"

    def test_format_iso(self):
        assert CalendarService.format_iso(WEDNESDAY) == "2024-01-10"


def test_first_weekday_from_preferences():
    service = CalendarService.from_preferences(TrackingPreferences(week_starts_on=6))
    assert service.week_dates(WEDNESDAY)[0] == datetime.date(2024, 1, 7)
