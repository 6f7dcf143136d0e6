"""Infrastructure layer - Configuration, database and persistence"""

from .db import DatabaseEngine, TimeEntryModel, get_engine, init_db
from .repository import TimeEntryRepository, TimeEntryStore

__all__ = ["DatabaseEngine", "TimeEntryModel", "get_engine", "init_db",
           "TimeEntryRepository", "TimeEntryStore"]
