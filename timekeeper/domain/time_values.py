"""
Time-of-day values and duration math.

Architecture Decision: Why a typed CanonicalTime?
Raw "HH:MM" strings are convenient at the edges (keyboard input, database
columns) but easy to get wrong deep inside duration math. Everything past
this module works with CanonicalTime values, which can only be built by the
parse functions below.

The helpers that deal with in-progress input (normalize, is_valid,
try_parse) never raise: a partial value is a normal state while the user is
typing.
"""

import re
from typing import Iterable, NamedTuple, Optional, Union

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
NON_DIGITS = re.compile(r"\D")

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
MAX_DIGITS = 4


class InvalidTimeFormat(ValueError):
    """Raised when a value is required to be a complete time but is not."""


class CanonicalTime(NamedTuple):
    """A validated time of day on the 24-hour clock."""

    hours: int
    minutes: int

    @classmethod
    def parse(cls, value: Union["CanonicalTime", str]) -> "CanonicalTime":
        """
        Parse a "H:MM" or "HH:MM" string.

        Raises:
            InvalidTimeFormat: if the value is not a complete, valid time
        """
        if isinstance(value, CanonicalTime):
            return value
        if not isinstance(value, str) or not is_valid(value):
            raise InvalidTimeFormat(f"Not a valid time (HH:MM): {value!r}")
        hours, minutes = value.split(":")
        return cls(int(hours), int(minutes))

    @classmethod
    def try_parse(cls, value: Optional[str]) -> Optional["CanonicalTime"]:
        """Like parse(), but returns None for partial or invalid input."""
        try:
            return cls.parse(value)
        except InvalidTimeFormat:
            return None

    @property
    def total_minutes(self) -> int:
        """Minutes since midnight"""
        return self.hours * MINUTES_PER_HOUR + self.minutes

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


TimeLike = Union[CanonicalTime, str]


def normalize(raw: Optional[str]) -> str:
    """
    Reformat raw input into (a prefix of) the canonical form.

    Non-digits are dropped and at most four digits are kept. Once a third
    digit is present the colon is inserted after the first two:

        "9"      -> "9"
        "093"    -> "09:3"
        "09:300" -> "09:30"
        "ab"     -> ""
    """
    digits = NON_DIGITS.sub("", raw or "")[:MAX_DIGITS]
    if len(digits) <= 2:
        return digits
    return f"{digits[:2]}:{digits[2:]}"


def is_valid(value: Optional[str]) -> bool:
    """Check whether value is a complete time of day."""
    return bool(value) and TIME_PATTERN.match(value) is not None


def minutes_of(value: TimeLike) -> int:
    return CanonicalTime.parse(value).total_minutes


def duration(start: TimeLike, end: TimeLike) -> int:
    """
    Minutes between two times of day.

    An end before the start is read as the next day, so "23:30" to "00:15"
    is 45 minutes. Equal times give 0, never a full day.

    Raises:
        InvalidTimeFormat: if either value is not a complete time
    """
    start_minutes = minutes_of(start)
    end_minutes = minutes_of(end)
    if end_minutes >= start_minutes:
        return end_minutes - start_minutes
    return (MINUTES_PER_DAY - start_minutes) + end_minutes


def format_minutes(minutes: int) -> str:
    """Format a duration as "2h 15m", dropping a zero unit ("2h", "45m")."""
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h" if mins == 0 else f"{hours}h {mins}m"


def total_minutes(entries: Iterable) -> int:
    """Sum of the duration of anything exposing a `duration` in minutes."""
    return sum(entry.duration for entry in entries)
