"""UI layer - PySide6 GUI components"""

from .time_input import TimeInput, TimeRangeEditor

__all__ = ["TimeInput", "TimeRangeEditor"]
