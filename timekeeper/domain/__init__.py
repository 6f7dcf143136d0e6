"""Domain layer - Pure business entities and logic"""

from .errors import AuthError, NetworkError, RecordNotFoundError, RepositoryError
from .models import EntryType, TimeEntry, TimeEntryDraft, TrackingPreferences
from .time_values import CanonicalTime, InvalidTimeFormat

__all__ = [
    "AuthError", "NetworkError", "RecordNotFoundError", "RepositoryError",
    "EntryType", "TimeEntry", "TimeEntryDraft", "TrackingPreferences",
    "CanonicalTime", "InvalidTimeFormat",
]
