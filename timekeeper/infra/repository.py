"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. The cache only knows the
TimeEntryStore protocol, which makes it easy to:
- Switch database implementations
- Mock the data service in tests
- Change data sources (local DB to cloud API)

TimeEntryRepository is the SQLAlchemy implementation. Database errors are
reported as NetworkError so callers handle every data service the same way.
"""

import datetime
import logging
from contextlib import contextmanager
from typing import List, Optional, Protocol

from sqlalchemy import select, delete, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from timekeeper.domain.errors import NetworkError, RecordNotFoundError
from timekeeper.domain.models import TimeEntry, TimeEntryDraft
from timekeeper.infra.db import TimeEntryModel, get_engine

logger = logging.getLogger(__name__)


class TimeEntryStore(Protocol):
    """The calls the time entry cache makes against the data service."""

    async def fetch_by_date(self, day: datetime.date) -> List[TimeEntry]: ...

    async def fetch_by_range(self, start: datetime.date, end: datetime.date) -> List[TimeEntry]: ...

    async def create(self, draft: TimeEntryDraft) -> TimeEntry: ...

    async def update(self, entry: TimeEntry) -> TimeEntry: ...

    async def delete(self, entry_id: str) -> None: ...


@contextmanager
def _translate_errors(action: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{action} failed: {e}")
        raise NetworkError(f"{action} failed", cause=e) from e


def _columns(draft: TimeEntryDraft) -> dict:
    """Column values for a draft or entry, including the derived duration"""
    values = draft.model_dump(exclude={"id"})
    values["entry_type"] = draft.entry_type.value
    return values


class TimeEntryRepository:
    """
    Handles all TimeEntry-related database operations.

    Converts between domain models (Pydantic) and ORM models (SQLAlchemy).
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def fetch_by_date(self, day: datetime.date) -> List[TimeEntry]:
        """Get all entries recorded on one day, earliest first"""
        with _translate_errors(f"Fetching entries for {day.isoformat()}"):
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    select(TimeEntryModel)
                    .where(TimeEntryModel.date == day)
                    .order_by(TimeEntryModel.start_time)
                )
                return [TimeEntry.model_validate(m) for m in result.scalars().all()]

    async def fetch_by_range(self, start: datetime.date, end: datetime.date) -> List[TimeEntry]:
        """Get all entries between two days, both inclusive"""
        with _translate_errors(f"Fetching entries for {start.isoformat()}..{end.isoformat()}"):
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    select(TimeEntryModel)
                    .where(and_(TimeEntryModel.date >= start, TimeEntryModel.date <= end))
                    .order_by(TimeEntryModel.date, TimeEntryModel.start_time)
                )
                return [TimeEntry.model_validate(m) for m in result.scalars().all()]

    async def create(self, draft: TimeEntryDraft) -> TimeEntry:
        """Create a new time entry; the database assigns the id"""
        with _translate_errors("Creating time entry"):
            session = await self._get_session()
            async with session:
                entry_model = TimeEntryModel(**_columns(draft))
                session.add(entry_model)
                await session.commit()
                await session.refresh(entry_model)
                return TimeEntry.model_validate(entry_model)

    async def update(self, entry: TimeEntry) -> TimeEntry:
        """Update an existing time entry"""
        with _translate_errors(f"Updating time entry {entry.id}"):
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    select(TimeEntryModel).where(TimeEntryModel.id == entry.id)
                )
                entry_model = result.scalar_one_or_none()
                if entry_model is None:
                    raise RecordNotFoundError(entry.id)

                for column, value in _columns(entry).items():
                    setattr(entry_model, column, value)

                await session.commit()
                await session.refresh(entry_model)
                return TimeEntry.model_validate(entry_model)

    async def delete(self, entry_id: str) -> None:
        """Delete a time entry by ID"""
        with _translate_errors(f"Deleting time entry {entry_id}"):
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    delete(TimeEntryModel).where(TimeEntryModel.id == entry_id)
                )
                await session.commit()
                if result.rowcount == 0:
                    raise RecordNotFoundError(entry_id)
