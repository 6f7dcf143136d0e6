"""
Masked time widgets.

Thin PySide6 wrappers around SegmentedTimeEditor: the widget forwards keys
to the editor and paints the buffer and caret the editor hands back.
"""

from typing import Optional, Tuple

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFormLayout, QLabel, QLineEdit, QWidget

from timekeeper.domain.time_values import CanonicalTime, duration, format_minutes
from timekeeper.services.time_editor import DEFAULT_PLACEHOLDER, SegmentedTimeEditor

KEY_NAMES = {
    Qt.Key_Backspace.value: "Backspace",
    Qt.Key_Delete.value: "Delete",
    Qt.Key_Left.value: "ArrowLeft",
    Qt.Key_Right.value: "ArrowRight",
    Qt.Key_Home.value: "Home",
    Qt.Key_End.value: "End",
}


class TimeInput(QLineEdit):
    """
    "HH:MM" line edit that always shows the full "__:__" mask.
    """

    time_changed = Signal(str)  # canonical value

    def __init__(self, value: str = "", placeholder: str = DEFAULT_PLACEHOLDER, parent=None):
        super().__init__(parent)
        self.editor = SegmentedTimeEditor(value, on_change=self.time_changed.emit,
                                          placeholder=placeholder)
        self.setMaxLength(len(self.editor.buffer))
        # Paste and cut bypass keyPressEvent
        self.textEdited.connect(self._on_text_edited)
        self._repaint()

    def time(self) -> str:
        return self.editor.value

    def set_time(self, value: Optional[str]):
        """Replace the value from outside, dropping any partial edit"""
        if self.editor.sync(value):
            self._repaint()

    def keyPressEvent(self, event):
        key_name = KEY_NAMES.get(int(event.key()))
        text = event.text()
        plain = not (event.modifiers() & (Qt.ControlModifier | Qt.AltModifier))

        if key_name is None and not (plain and len(text) == 1 and text.isprintable()):
            # Tab, Enter, shortcuts
            super().keyPressEvent(event)
            return

        if self.hasSelectedText() and (key_name in ("Backspace", "Delete") or text.isdigit()):
            # Typing over a selection starts the field over
            self.editor.clear()
            if key_name:
                self._repaint()
                event.accept()
                return
        else:
            self.editor.set_cursor(self.cursorPosition())

        if key_name:
            self.editor.handle_key(key_name)
        elif text.isdigit():
            self.editor.on_digit(text)
        # Letters and punctuation are swallowed
        self._repaint()
        event.accept()

    def mousePressEvent(self, event):
        super().mousePressEvent(event)
        self.editor.set_cursor(self.cursorPosition())
        self._repaint()

    def _on_text_edited(self, text: str):
        if self.editor.sync(text):
            self.time_changed.emit(self.editor.value)
        self._repaint()

    def _repaint(self):
        buffer, cursor = self.editor.render()
        if self.text() != buffer:
            self.setText(buffer)
        if cursor is not None:
            self.setCursorPosition(cursor)


class TimeRangeEditor(QWidget):
    """
    Start and end fields with a live duration preview.

    An end before the start counts as the next day.
    """

    def __init__(self, start: str = "", end: str = "", placeholder: str = DEFAULT_PLACEHOLDER,
                 parent=None):
        super().__init__(parent)
        self.start_input = TimeInput(start, placeholder)
        self.end_input = TimeInput(end, placeholder)
        self.duration_label = QLabel()

        form_layout = QFormLayout(self)
        form_layout.addRow("Start Time:", self.start_input)
        form_layout.addRow("End Time:", self.end_input)
        form_layout.addRow("Duration:", self.duration_label)

        self.start_input.time_changed.connect(self._update_duration)
        self.end_input.time_changed.connect(self._update_duration)
        self._update_duration()

    def draft_times(self) -> Optional[Tuple[str, str]]:
        """Canonical (start, end) once both fields hold a complete time"""
        start = CanonicalTime.try_parse(self.start_input.time())
        end = CanonicalTime.try_parse(self.end_input.time())
        if start is None or end is None:
            return None
        return str(start), str(end)

    def _update_duration(self, *_):
        times = self.draft_times()
        self.duration_label.setText(format_minutes(duration(*times)) if times else "")
