"""
Tests for the Qt time widgets, driven with QTest key events.
"""

from PySide6.QtCore import Qt
from PySide6.QtTest import QTest

from timekeeper.ui.time_input import TimeInput, TimeRangeEditor


def test_typing_fills_the_mask(qapp):
    widget = TimeInput()
    values = []
    widget.time_changed.connect(values.append)

    assert widget.text() == "__:__"
    QTest.keyClicks(widget, "0900")

    assert widget.text() == "09:00"
    assert widget.time() == "09:00"
    assert values == ["0", "09", "09:0", "09:00"]
    assert widget.cursorPosition() == 5


def test_backspace_and_letters(qapp):
    widget = TimeInput("12:30")
    widget.setCursorPosition(5)

    QTest.keyClick(widget, Qt.Key_Backspace)
    assert widget.text() == "12:3_"

    QTest.keyClicks(widget, "ab")
    assert widget.text() == "12:3_"
    assert widget.time() == "12:3"


def test_caret_skips_colon(qapp):
    widget = TimeInput()
    QTest.keyClicks(widget, "09")
    assert widget.cursorPosition() == 3

    QTest.keyClick(widget, Qt.Key_Left)
    assert widget.cursorPosition() == 1


def test_set_time_from_outside(qapp):
    widget = TimeInput()
    values = []
    widget.time_changed.connect(values.append)

    widget.set_time("9:30")

    assert widget.text() == "09:30"
    assert widget.time() == "09:30"
    assert values == []


def test_edit_signal_only_emits_on_change(qapp):
    widget = TimeInput("12:30")
    values = []
    widget.time_changed.connect(values.append)

    widget.textEdited.emit("12:30")
    assert values == []
    assert widget.text() == "12:30"

    widget.textEdited.emit("0815")
    assert values == ["08:15"]
    assert widget.text() == "08:15"


def test_typing_over_selection_starts_over(qapp):
    widget = TimeInput("12:30")
    widget.selectAll()

    QTest.keyClicks(widget, "08")

    assert widget.text() == "08:__"


def test_range_editor_shows_overnight_duration(qapp):
    editor = TimeRangeEditor()
    assert editor.duration_label.text() == ""
    assert editor.draft_times() is None

    QTest.keyClicks(editor.start_input, "1700")
    assert editor.duration_label.text() == ""

    QTest.keyClicks(editor.end_input, "0900")
    assert editor.draft_times() == ("17:00", "09:00")
    assert editor.duration_label.text() == "16h"


def test_range_editor_with_initial_values(qapp):
    editor = TimeRangeEditor("09:00", "11:15", placeholder="-")
    assert editor.duration_label.text() == "2h 15m"
    assert editor.start_input.text() == "09:00"

    QTest.keyClick(editor.end_input, Qt.Key_End)
    QTest.keyClick(editor.end_input, Qt.Key_Backspace)
    assert editor.end_input.text() == "11:1-"
    assert editor.duration_label.text() == ""
