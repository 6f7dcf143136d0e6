"""
Tests for the SQLAlchemy time entry repository.
"""

import datetime
import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from timekeeper.domain.errors import NetworkError, RecordNotFoundError, RepositoryError
from timekeeper.domain.models import EntryType
from timekeeper.infra.db import TimeEntryModel
from timekeeper.infra.repository import TimeEntryRepository
from conftest import make_draft, make_entry

JAN_10 = datetime.date(2024, 1, 10)
JAN_11 = datetime.date(2024, 1, 11)
JAN_12 = datetime.date(2024, 1, 12)


@pytest.mark.asyncio
async def test_create_assigns_id_and_stores_duration(db_session):
    repo = TimeEntryRepository(session=db_session)

    entry = await repo.create(make_draft(JAN_10, start="23:30", end="00:15",
                                         entry_type=EntryType.PRODUCT, quantity=3, unit_price=20))

    uuid.UUID(entry.id)
    assert entry.duration == 45
    assert entry.entry_type is EntryType.PRODUCT
    assert entry.quantity == 3

    async with db_session:
        row = (await db_session.execute(
            select(TimeEntryModel).where(TimeEntryModel.id == entry.id)
        )).scalar_one()
    assert row.duration == 45
    assert row.entry_type == "product"


@pytest.mark.asyncio
async def test_fetch_by_date_returns_only_that_day(db_session):
    repo = TimeEntryRepository(session=db_session)
    late = await repo.create(make_draft(JAN_10, start="14:00", end="15:00"))
    early = await repo.create(make_draft(JAN_10, start="08:00", end="09:00"))
    await repo.create(make_draft(JAN_11))

    entries = await repo.fetch_by_date(JAN_10)

    assert [e.id for e in entries] == [early.id, late.id]


@pytest.mark.asyncio
async def test_fetch_by_range_is_inclusive(db_session):
    repo = TimeEntryRepository(session=db_session)
    first = await repo.create(make_draft(JAN_10))
    second = await repo.create(make_draft(JAN_11))
    await repo.create(make_draft(JAN_12))

    entries = await repo.fetch_by_range(JAN_10, JAN_11)

    assert [e.id for e in entries] == [first.id, second.id]


@pytest.mark.asyncio
async def test_update_rewrites_fields(db_session):
    repo = TimeEntryRepository(session=db_session)
    entry = await repo.create(make_draft(JAN_10))

    saved = await repo.update(entry.revised(end_time="12:15", billable=False, invoiced=True))

    assert saved.id == entry.id
    assert saved.duration == 195
    assert saved.billable is False
    assert saved.invoiced is True
    assert (await repo.fetch_by_date(JAN_10)) == [saved]


@pytest.mark.asyncio
async def test_update_unknown_entry(db_session):
    repo = TimeEntryRepository(session=db_session)

    with pytest.raises(RecordNotFoundError) as exc_info:
        await repo.update(make_entry("missing", JAN_10))

    assert exc_info.value.entry_id == "missing"


@pytest.mark.asyncio
async def test_delete(db_session):
    repo = TimeEntryRepository(session=db_session)
    entry = await repo.create(make_draft(JAN_10))

    await repo.delete(entry.id)

    assert await repo.fetch_by_date(JAN_10) == []
    with pytest.raises(RecordNotFoundError):
        await repo.delete(entry.id)


@pytest.mark.asyncio
async def test_database_errors_become_network_errors():
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    session.__aexit__.return_value = False
    repo = TimeEntryRepository(session=session)

    with pytest.raises(NetworkError) as exc_info:
        await repo.fetch_by_date(JAN_10)

    assert isinstance(exc_info.value, RepositoryError)
    assert isinstance(exc_info.value.cause, OperationalError)
