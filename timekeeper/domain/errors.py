"""
Failures raised by time entry repositories.

The cache surfaces these to its callers unchanged; only a failed create is
turned into a local placeholder entry.
"""

from typing import Optional


class RepositoryError(RuntimeError):
    """Base class for any failed call to the data service."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class NetworkError(RepositoryError):
    """The data service could not be reached or did not answer."""


class AuthError(RepositoryError):
    """The data service rejected the session."""


class RecordNotFoundError(RepositoryError):
    """The referenced entry does not exist on the data service."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"Time entry {entry_id} not found")
        self.entry_id = entry_id
