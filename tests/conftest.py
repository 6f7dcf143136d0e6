"""
Pytest configuration and fixtures.
"""

import os
import sys
import datetime
from pathlib import Path
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from timekeeper.domain.models import TimeEntry, TimeEntryDraft
from timekeeper.infra.db import Base


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for all widget tests"""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


def make_draft(day=datetime.date(2024, 1, 10), start="09:00", end="10:00",
               client_id="client-1", **fields) -> TimeEntryDraft:
    return TimeEntryDraft(client_id=client_id, activity_id="activity-1", date=day,
                          start_time=start, end_time=end, **fields)


def make_entry(entry_id, day=datetime.date(2024, 1, 10), start="09:00", end="10:00",
               client_id="client-1", **fields) -> TimeEntry:
    return make_draft(day, start, end, client_id, **fields).with_id(entry_id)
