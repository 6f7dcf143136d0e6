#!/usr/bin/env python

"""
TimeKeeper - Time entry preview

Loads the current week of time entries, then opens a start/end editor pair
with a live duration, the building block the time entry forms are made of.

Usage:
    python main.py
"""

import asyncio
import datetime
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from PySide6.QtWidgets import QApplication

from timekeeper.domain.time_values import format_minutes
from timekeeper.infra import TimeEntryRepository, init_db
from timekeeper.infra.config import Settings, get_settings
from timekeeper.services import CalendarService, TimeEntryCache
from timekeeper.ui import TimeRangeEditor

logger = logging.getLogger(__name__)


async def load_current_week(settings: Settings, repository=None) -> TimeEntryCache:
    """Cache holding this week's entries, built from the user's preferences"""
    preferences = settings.preferences
    if repository is None:
        await init_db(settings.get_db_url())
        repository = TimeEntryRepository()

    cache = TimeEntryCache.from_preferences(repository, preferences)
    week = CalendarService.from_preferences(preferences).week_dates()
    await cache.load_for_range(week[0], week[-1])
    return cache


def main():
    """Main entry point"""
    settings = get_settings()
    preferences = settings.preferences
    logging.basicConfig(
        level=preferences.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cache = asyncio.run(load_current_week(settings))
    today = cache.total_minutes_for_date(datetime.date.today())
    logger.info(f"{len(cache)} entries this week, {format_minutes(today)} today")

    app = QApplication(sys.argv)
    app.setApplicationName(settings.app_name)

    window = TimeRangeEditor(placeholder=preferences.placeholder_char)
    window.setWindowTitle(f"{settings.app_name} - Today: {format_minutes(today)}")
    window.setMinimumWidth(300)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
