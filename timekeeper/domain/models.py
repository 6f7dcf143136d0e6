"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Pydantic provides runtime data validation, ensuring data integrity when loading
from the data service, config files or form input. Times are validated and
zero-padded on the way in, and the duration is a computed field, so an entry
can never carry a duration that disagrees with its own start and end.
"""

import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, computed_field

from timekeeper.domain import time_values


def _canonical(value: str) -> str:
    return str(time_values.CanonicalTime.parse(value))


ClockTime = Annotated[str, AfterValidator(_canonical)]


class EntryType(str, Enum):
    SERVICE = "service"
    PRODUCT = "product"


class TimeEntryDraft(BaseModel):
    """
    A time entry as submitted by a form, before the data service assigns an id.

    Examples: "Client A / Consulting, 09:00-11:30", "Client B / Licence, 1x"
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    client_id: str = Field(..., min_length=1)
    activity_id: str = Field(..., min_length=1)
    date: datetime.date
    start_time: ClockTime
    end_time: ClockTime
    description: Optional[str] = None
    billable: bool = True
    invoiced: bool = False
    entry_type: EntryType = EntryType.SERVICE

    # Only meaningful for product entries
    quantity: Optional[float] = Field(default=None, ge=0)
    unit_price: Optional[float] = Field(default=None, ge=0)

    @computed_field
    @property
    def duration(self) -> int:
        """Minutes between start and end, wrapping past midnight"""
        return time_values.duration(self.start_time, self.end_time)

    def with_id(self, entry_id: str) -> "TimeEntry":
        """Attach an id, turning the draft into a full entry"""
        return TimeEntry(id=entry_id, **self.model_dump(exclude={"duration"}))


class TimeEntry(TimeEntryDraft):
    """
    A single recorded block of work for a client and activity on one day.

    `date` does not change after creation; the cache refuses updates that
    would move an entry to another day.
    """

    id: str = Field(..., min_length=1)

    def revised(self, **changes) -> "TimeEntry":
        """
        Return a copy with the given fields changed.

        The copy is validated again, so the duration follows the new times.
        """
        data = self.model_dump(exclude={"duration"})
        data.update(changes)
        return type(self).model_validate(data)

    def as_draft(self) -> TimeEntryDraft:
        return TimeEntryDraft.model_validate(self.model_dump(exclude={"id", "duration"}))


class TrackingPreferences(BaseModel):
    """
    User configuration for time recording.

    This allows users to customize behavior without touching code.
    """
    model_config = ConfigDict(from_attributes=True)

    # Ids of entries kept locally after a failed create start with this
    local_id_prefix: str = Field(default="local-", min_length=1)

    # Editor
    placeholder_char: str = Field(default="_", min_length=1, max_length=1,
                                  description="Shown in empty digit slots")

    # Calendar
    week_starts_on: int = Field(default=0, ge=0, le=6,
                                description="First day of the week (0=Monday, 6=Sunday)")

    log_level: str = Field(default="INFO", description="Root log level for the application")
