"""Services layer - Business logic"""

from .calendar_service import CalendarService
from .entry_cache import TimeEntryCache
from .time_editor import EditorState, SegmentedTimeEditor

__all__ = ["CalendarService", "TimeEntryCache", "EditorState", "SegmentedTimeEditor"]
