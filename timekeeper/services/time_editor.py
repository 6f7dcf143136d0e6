"""
Segmented Time Editor - Masked "HH:MM" input as a small state machine.

Architecture Decision: Explicit state instead of widget state
The editor keeps a fixed 5-character buffer ("__:__") and a caret in an
immutable EditorState. Every keystroke is a pure function from one state to
the next, so the logic can be tested without a GUI toolkit. The Qt widget in
timekeeper.ui only forwards keys and paints what render() returns.

Buffer layout:

    index   0 1 2 3 4
    buffer  H H : M M

Caret positions sit between characters (0..5). Position 2, between the hour
digits and the colon, is never used; it is snapped to 3.
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from timekeeper.domain.time_values import CanonicalTime, normalize

DIGIT_SLOTS = (0, 1, 3, 4)
COLON_INDEX = 2
BUFFER_LENGTH = 5
CARET_POSITIONS = (0, 1, 3, 4, 5)
DEFAULT_PLACEHOLDER = "_"


@dataclass(frozen=True)
class EditorState:
    """The display buffer together with the caret position."""

    buffer: str
    cursor: int

    @classmethod
    def empty(cls, placeholder: str = DEFAULT_PLACEHOLDER) -> "EditorState":
        return cls(f"{placeholder * 2}:{placeholder * 2}", 0)

    @classmethod
    def from_value(cls, value: Optional[str], placeholder: str = DEFAULT_PLACEHOLDER) -> "EditorState":
        """
        Build a state from an externally supplied value.

        Complete times are zero-padded first ("9:30" -> "09:30"), anything
        else goes through normalize(). Digits fill the slots left to right
        and stop at the first one that could not be part of a time.
        """
        state = cls.empty(placeholder)
        chars = list(state.buffer)
        for slot, digit in zip(DIGIT_SLOTS, _digits_of(_external_text(value))):
            chars[slot] = digit
            if not _plausible(chars):
                chars[slot] = placeholder
                break
        buffer = "".join(chars)
        return cls(buffer, _first_free_slot(buffer, placeholder))

    def digit_at(self, slot: int) -> Optional[str]:
        char = self.buffer[slot]
        return char if char.isdigit() else None


def _external_text(value: Optional[str]) -> str:
    parsed = CanonicalTime.try_parse(value)
    return str(parsed) if parsed else normalize(value)


def _digits_of(text: str) -> str:
    return "".join(c for c in text if c.isdigit())


def _first_free_slot(buffer: str, placeholder: str) -> int:
    for slot in DIGIT_SLOTS:
        if buffer[slot] == placeholder:
            return slot
    return BUFFER_LENGTH


def _plausible(chars) -> bool:
    """Whether the digits in the buffer can still become a valid time."""
    hour_tens, hour_units, minute_tens = chars[0], chars[1], chars[3]
    if hour_tens.isdigit() and hour_tens > "2":
        return False
    if hour_tens == "2" and hour_units.isdigit() and hour_units > "3":
        return False
    if minute_tens.isdigit() and minute_tens > "5":
        return False
    return True


def snap_cursor(position: int) -> int:
    """Clamp a caret position into the buffer and off the colon."""
    position = max(0, min(BUFFER_LENGTH, position))
    return COLON_INDEX + 1 if position == COLON_INDEX else position


def canonical_value(state: EditorState) -> str:
    """
    The value a form should see for this buffer.

    Only the run of digits starting at the first slot counts, so a gap
    ("0_:3_") never slides a minute digit into the hour.
    """
    digits = []
    for slot in DIGIT_SLOTS:
        digit = state.digit_at(slot)
        if digit is None:
            break
        digits.append(digit)
    return normalize("".join(digits))


# ----------------------------------------------------------------------
# Transitions
# ----------------------------------------------------------------------

def type_digit(state: EditorState, digit: str, placeholder: str = DEFAULT_PLACEHOLDER) -> EditorState:
    """
    Write a digit into the first empty slot at or after the caret.

    Returns the state unchanged when there is no empty slot ahead or when
    the digit would make the time impossible (e.g. "3" as the hour tens).
    """
    if len(digit) != 1 or not digit.isdigit():
        return state
    start = snap_cursor(state.cursor)
    slot = next((s for s in DIGIT_SLOTS if s >= start and state.buffer[s] == placeholder), None)
    if slot is None:
        return state

    chars = list(state.buffer)
    chars[slot] = digit
    if not _plausible(chars):
        return state
    return EditorState("".join(chars), _caret_after(slot))


def backspace(state: EditorState, placeholder: str = DEFAULT_PLACEHOLDER) -> EditorState:
    """Clear the digit before the caret, jumping over the colon."""
    cursor = snap_cursor(state.cursor)
    slot = next((s for s in reversed(DIGIT_SLOTS) if s < cursor), None)
    if slot is None:
        return replace(state, cursor=cursor)
    return EditorState(_clear(state.buffer, slot, placeholder), slot)


def delete(state: EditorState, placeholder: str = DEFAULT_PLACEHOLDER) -> EditorState:
    """Clear the digit after the caret, jumping over the colon. The caret stays."""
    cursor = snap_cursor(state.cursor)
    slot = next((s for s in DIGIT_SLOTS if s >= cursor), None)
    if slot is None:
        return replace(state, cursor=cursor)
    return EditorState(_clear(state.buffer, slot, placeholder), cursor)


def move_left(state: EditorState) -> EditorState:
    index = CARET_POSITIONS.index(snap_cursor(state.cursor))
    return replace(state, cursor=CARET_POSITIONS[max(0, index - 1)])


def move_right(state: EditorState) -> EditorState:
    index = CARET_POSITIONS.index(snap_cursor(state.cursor))
    return replace(state, cursor=CARET_POSITIONS[min(len(CARET_POSITIONS) - 1, index + 1)])


def _caret_after(slot: int) -> int:
    return snap_cursor(slot + 1)


def _clear(buffer: str, slot: int, placeholder: str) -> str:
    return buffer[:slot] + placeholder + buffer[slot + 1:]


class SegmentedTimeEditor:
    """
    Keystroke handler for one masked time field.

    Holds the current EditorState, the canonical value last handed to the
    form and a one-shot pending caret position. After any key the caller
    repaints with render(), which returns the buffer and the caret to place
    (or None when the caret should stay where it is).
    """

    def __init__(self, value: str = "", on_change: Optional[Callable[[str], None]] = None,
                 placeholder: str = DEFAULT_PLACEHOLDER):
        if len(placeholder) != 1 or placeholder.isdigit() or placeholder == ":":
            raise ValueError(f"Invalid placeholder character: {placeholder!r}")
        self.placeholder = placeholder
        self.on_change = on_change
        self.state = EditorState.from_value(value, placeholder)
        self.value = canonical_value(self.state)
        # The first render places the caret at the first empty slot
        self.pending_cursor: Optional[int] = self.state.cursor

        self._key_handlers: Dict[str, Callable[[], bool]] = {
            "Backspace": self.on_backspace,
            "Delete": self.on_delete,
            "ArrowLeft": self.on_arrow_left,
            "ArrowRight": self.on_arrow_right,
            "Home": self.on_home,
            "End": self.on_end,
        }

    @property
    def buffer(self) -> str:
        return self.state.buffer

    @property
    def cursor(self) -> int:
        return self.state.cursor

    def is_complete(self) -> bool:
        return CanonicalTime.try_parse(self.value) is not None

    # ------------------------------------------------------------------
    # Keystrokes
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> bool:
        """
        Dispatch a key name ("7", "Backspace", "ArrowLeft", ...).

        Returns True if the editor consumed the key.
        """
        if len(key) == 1 and key.isdigit():
            return self.on_digit(key)
        handler = self._key_handlers.get(key)
        return handler() if handler else False

    def on_digit(self, digit: str) -> bool:
        return self._apply(type_digit(self.state, digit, self.placeholder))

    def on_backspace(self) -> bool:
        return self._apply(backspace(self.state, self.placeholder))

    def on_delete(self) -> bool:
        return self._apply(delete(self.state, self.placeholder))

    def on_arrow_left(self) -> bool:
        return self._apply(move_left(self.state))

    def on_arrow_right(self) -> bool:
        return self._apply(move_right(self.state))

    def on_home(self) -> bool:
        return self._apply(replace(self.state, cursor=CARET_POSITIONS[0]))

    def on_end(self) -> bool:
        return self._apply(replace(self.state, cursor=CARET_POSITIONS[-1]))

    def set_cursor(self, position: int) -> None:
        """Caret placed by a pointer click"""
        snapped = snap_cursor(position)
        self.state = replace(self.state, cursor=snapped)
        if snapped != position:
            self.pending_cursor = snapped

    def clear(self) -> None:
        """Reset to the empty mask; the form is always told the value is now empty"""
        self.state = EditorState.empty(self.placeholder)
        self.value = ""
        self.pending_cursor = self.state.cursor
        if self.on_change:
            self.on_change("")

    # ------------------------------------------------------------------
    # External value
    # ------------------------------------------------------------------
    def sync(self, value: Optional[str]) -> bool:
        """
        Adopt a value set from outside (e.g. a form reset).

        Nothing happens when the value matches what the editor already
        holds; otherwise the buffer is rebuilt and any partial edit is lost.
        The change callback is not called for external values.
        """
        if _external_text(value) == self.value:
            return False
        self.state = EditorState.from_value(value, self.placeholder)
        self.value = canonical_value(self.state)
        self.pending_cursor = self.state.cursor
        return True

    def render(self) -> Tuple[str, Optional[int]]:
        """Buffer to display and the caret to restore, consuming the pending caret."""
        cursor, self.pending_cursor = self.pending_cursor, None
        return self.state.buffer, cursor

    def _apply(self, new_state: EditorState) -> bool:
        if new_state == self.state:
            return False
        edited = new_state.buffer != self.state.buffer
        self.state = new_state
        self.pending_cursor = new_state.cursor
        if edited:
            self.value = canonical_value(new_state)
            if self.on_change:
                self.on_change(self.value)
        return True
