"""
Time Entry Cache - Session-wide view of the user's time entries.

Architecture Decision: One map, many partial loads
Screens fetch entries one day (or one range) at a time, but everything that
reads from the cache should see a single consistent collection. All entries
live in one dict keyed by id; each load decides which part of that dict it
is authoritative for:

- load_for_date() owns exactly one day and leaves every other day alone.
- load_for_range() is a full refresh and replaces the whole dict.

Writes go to the repository first and touch the dict only once the
repository has answered. The one exception is add(): if the create fails,
the draft is kept as a placeholder entry with a local id so the user's input
is not lost.
"""

import datetime
import logging
import uuid
from typing import Dict, List, Optional

from timekeeper.domain.errors import RepositoryError
from timekeeper.domain.models import TimeEntry, TimeEntryDraft, TrackingPreferences
from timekeeper.domain.time_values import total_minutes
from timekeeper.infra.repository import TimeEntryStore

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_ID_PREFIX = "local-"


class TimeEntryCache:
    """
    In-memory, id-keyed store of time entries backed by a repository.

    Owns the entries for the active session; clear() discards them.
    """

    def __init__(self, repository: TimeEntryStore, local_id_prefix: str = DEFAULT_LOCAL_ID_PREFIX):
        self.repository = repository
        self.local_id_prefix = local_id_prefix
        self.entries: Dict[str, TimeEntry] = {}

    @classmethod
    def from_preferences(cls, repository: TimeEntryStore,
                         preferences: TrackingPreferences) -> "TimeEntryCache":
        return cls(repository, local_id_prefix=preferences.local_id_prefix)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    async def load_for_date(self, day: datetime.date) -> List[TimeEntry]:
        """
        Refresh one day from the repository.

        The fetched set replaces every cached entry dated `day`; entries for
        other days are kept untouched. Loading the same unchanged day twice
        leaves the cache as it was.
        """
        fetched = await self.repository.fetch_by_date(day)

        merged = {entry_id: entry for entry_id, entry in self.entries.items() if entry.date != day}
        for entry in fetched:
            merged[entry.id] = entry
        self.entries = merged

        logger.info(f"Loaded {len(fetched)} entries for {day.isoformat()} ({len(self.entries)} cached)")
        return fetched

    async def load_for_range(self, start: datetime.date, end: datetime.date) -> List[TimeEntry]:
        """
        Replace the whole cache with the entries between start and end.

        Unlike load_for_date() this is not a merge: entries outside the range,
        placeholders included, are dropped.
        """
        fetched = await self.repository.fetch_by_range(start, end)
        # Full refresh on purpose; a range load is never merged.
        self.entries = {entry.id: entry for entry in fetched}

        logger.info(f"Loaded {len(fetched)} entries for {start.isoformat()}..{end.isoformat()}")
        return fetched

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def add(self, draft: TimeEntryDraft) -> TimeEntry:
        """
        Create an entry through the repository and cache the stored copy.

        If the repository fails, the draft is cached under a local
        placeholder id (see is_local()) and returned instead of raising.
        """
        try:
            entry = await self.repository.create(draft)
        except RepositoryError as e:
            entry = draft.with_id(self._new_local_id())
            logger.warning(f"Create failed, keeping entry locally as {entry.id}: {e}")

        self.entries[entry.id] = entry
        return entry

    async def update(self, entry: TimeEntry) -> TimeEntry:
        """
        Save a changed entry; the cache changes only after the repository succeeds.

        Raises:
            ValueError: if the change would move a cached entry to another day
            RepositoryError: if the repository rejects the update
        """
        cached = self.entries.get(entry.id)
        if cached is not None and cached.date != entry.date:
            raise ValueError(
                f"Entry {entry.id} belongs to {cached.date.isoformat()} and cannot be moved"
            )

        try:
            saved = await self.repository.update(entry)
        except RepositoryError as e:
            logger.warning(f"Update of entry {entry.id} failed: {e}")
            raise

        self.entries[saved.id] = saved
        return saved

    async def remove(self, entry_id: str) -> None:
        """
        Delete an entry through the repository, then drop it from the cache.

        Raises:
            RepositoryError: if the repository fails; the entry stays cached
        """
        try:
            await self.repository.delete(entry_id)
        except RepositoryError as e:
            logger.warning(f"Delete of entry {entry_id} failed: {e}")
            raise

        self.entries.pop(entry_id, None)

    # ------------------------------------------------------------------
    # Queries (no I/O)
    # ------------------------------------------------------------------
    def get(self, entry_id: str) -> Optional[TimeEntry]:
        return self.entries.get(entry_id)

    def all(self) -> List[TimeEntry]:
        return list(self.entries.values())

    def get_for_date(self, day: datetime.date) -> List[TimeEntry]:
        return [entry for entry in self.entries.values() if entry.date == day]

    def get_for_client(self, client_id: str) -> List[TimeEntry]:
        return [entry for entry in self.entries.values() if entry.client_id == client_id]

    def get_for_date_range(self, start: datetime.date, end: datetime.date) -> List[TimeEntry]:
        """Entries dated between start and end, both inclusive"""
        return [entry for entry in self.entries.values() if start <= entry.date <= end]

    def total_minutes_for_date(self, day: datetime.date) -> int:
        return total_minutes(self.get_for_date(day))

    def is_local(self, entry_id: str) -> bool:
        """True for placeholder entries whose create never reached the repository"""
        return entry_id.startswith(self.local_id_prefix)

    def local_entries(self) -> List[TimeEntry]:
        return [entry for entry in self.entries.values() if self.is_local(entry.id)]

    def clear(self) -> None:
        """Discard all entries (session end)"""
        self.entries = {}

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self.entries

    def _new_local_id(self) -> str:
        return f"{self.local_id_prefix}{uuid.uuid4()}"
