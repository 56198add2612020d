"""Reference host buffer that applies engine actions to a list of lines."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Type

from vim_input.actions.core import (
    Action,
    Backspace,
    Batch,
    ChangeMode,
    ClearInput,
    CommandOutput,
    DeleteLine,
    DeleteRange,
    InsertChar,
    InsertNewline,
    MoveCursor,
    NoOp,
    PasteAfter,
    PasteBefore,
    Redo,
    ReplaceChar,
    Submit,
    Undo,
    VimState,
)
from vim_input.runtime import telemetry

from .state import BufferView, Cursor
from .text import (
    advance_chars,
    byte_len,
    clamp_to_char_boundary,
    encode,
    first_non_whitespace,
    is_char_boundary,
    last_char_index,
    retreat_chars,
    slice_bytes,
)


class BufferValidationError(RuntimeError):
    """Raised when a host hands the buffer an out-of-range cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= len(lines):
        raise BufferValidationError("Row out of range", cursor=cursor)
    data = encode(lines[row])
    if col < 0 or col > len(data):
        raise BufferValidationError("Column out of range", cursor=cursor)
    if not is_char_boundary(data, col):
        raise BufferValidationError("Column splits a character", cursor=cursor)
    return cursor


class InputBuffer:
    """Owns text and cursor for a host, mutated only through ``apply``.

    ``Submit``, ``Undo``, ``Redo`` and ``CommandOutput`` carry no buffer
    change; they are queued on ``signals`` for the embedding application.
    """

    def __init__(
        self,
        lines: Sequence[str] | str = ("",),
        cursor: Cursor = (0, 0),
        *,
        name: str = "input",
    ) -> None:
        if isinstance(lines, str):
            lines = lines.split("\n")
        self.name = name
        self.lines: List[str] = list(lines) or [""]
        self.row, self.col = ensure_cursor(self.lines, cursor)
        self.mode = VimState.NORMAL
        self.signals: List[Action] = []
        self._handlers: Dict[Type[object], Callable[..., None]] = {
            NoOp: self._ignore,
            InsertChar: self._insert_char,
            InsertNewline: self._insert_newline,
            Backspace: self._backspace,
            DeleteRange: self._delete_range,
            DeleteLine: self._delete_line,
            MoveCursor: self._move_cursor,
            ChangeMode: self._change_mode,
            ReplaceChar: self._replace_char,
            PasteAfter: self._paste_after,
            PasteBefore: self._paste_before,
            ClearInput: self._clear,
            Submit: self._signal,
            Undo: self._signal,
            Redo: self._signal,
            CommandOutput: self._signal,
            Batch: self._batch,
        }

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def cursor(self) -> Cursor:
        return (self.row, self.col)

    def set_cursor(self, row: int, col: int) -> None:
        self.row, self.col = ensure_cursor(self.lines, (row, col))

    def view(self) -> BufferView:
        return BufferView.build(self.lines, self.row, self.col)

    def drain_signals(self) -> List[Action]:
        signals, self.signals = self.signals, []
        return signals

    def apply(self, action: Action) -> None:
        """Apply one engine action (a ``Batch`` is applied front to back)."""

        with telemetry.span(
            name="buffer::apply",
            component=True,
            metadata={"buffer": self.name, "action": type(action).__name__},
        ):
            self._apply(action)
            if self.mode is not VimState.INSERT:
                self._rest_on_character()

    def _apply(self, action: Action) -> None:
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unsupported action {action!r}")
        handler(action)

    def _batch(self, action: Batch) -> None:
        for item in action:
            self._apply(item)

    def _ignore(self, action: NoOp) -> None:
        del action

    def _signal(self, action: Action) -> None:
        self.signals.append(action)

    def _clear(self, action: ClearInput) -> None:
        del action
        self.lines = [""]
        self.row, self.col = 0, 0

    def _insert_char(self, action: InsertChar) -> None:
        self.row, self.col = self._insert_text(self.row, self.col, action.ch)

    def _insert_newline(self, action: InsertNewline) -> None:
        del action
        self.row, self.col = self._insert_text(self.row, self.col, "\n")

    def _backspace(self, action: Backspace) -> None:
        del action
        if self.col > 0:
            start = retreat_chars(self.current_line, self.col, 1)
            self._splice(self.row, start, self.row, self.col)
            self.col = start
        elif self.row > 0:
            joined_col = byte_len(self.lines[self.row - 1])
            self._splice(self.row - 1, joined_col, self.row, 0)
            self.row, self.col = self.row - 1, joined_col

    def _delete_range(self, action: DeleteRange) -> None:
        start_row = self._clamp_row(action.start_row)
        end_row = self._clamp_row(action.end_row)
        start_col = clamp_to_char_boundary(self.lines[start_row], action.start_col)
        end_col = clamp_to_char_boundary(self.lines[end_row], action.end_col)
        if (start_row, start_col) >= (end_row, end_col):
            return
        self._splice(start_row, start_col, end_row, end_col)
        self.row, self.col = start_row, start_col

    def _delete_line(self, action: DeleteLine) -> None:
        if not 0 <= action.row < len(self.lines):
            return
        del self.lines[action.row]
        if not self.lines:
            self.lines = [""]
        self.row = min(action.row, len(self.lines) - 1)
        self.col = first_non_whitespace(self.current_line)

    def _move_cursor(self, action: MoveCursor) -> None:
        self.row = self._clamp_row(action.row)
        self.col = clamp_to_char_boundary(self.current_line, action.col)

    def _change_mode(self, action: ChangeMode) -> None:
        if self.mode is VimState.INSERT and action.mode is VimState.NORMAL:
            self.col = retreat_chars(self.current_line, self.col, 1)
        self.mode = action.mode

    def _replace_char(self, action: ReplaceChar) -> None:
        if not 0 <= action.row < len(self.lines):
            return
        line = self.lines[action.row]
        if action.col >= byte_len(line):
            return
        end = advance_chars(line, action.col, 1)
        self._splice(action.row, action.col, action.row, end, action.ch)

    def _paste_after(self, action: PasteAfter) -> None:
        if action.linewise:
            self._paste_lines(self.row + 1, action.text)
            return
        col = advance_chars(self.current_line, self.col, 1)
        self._paste_text(col, action.text)

    def _paste_before(self, action: PasteBefore) -> None:
        if action.linewise:
            self._paste_lines(self.row, action.text)
            return
        self._paste_text(self.col, action.text)

    def _paste_lines(self, at_row: int, text: str) -> None:
        self.lines[at_row:at_row] = text.split("\n")
        self.row = at_row
        self.col = first_non_whitespace(self.current_line)

    def _paste_text(self, col: int, text: str) -> None:
        row, end = self._insert_text(self.row, col, text)
        self.row = row
        self.col = retreat_chars(self.lines[row], end, 1)

    @property
    def current_line(self) -> str:
        return self.lines[self.row]

    def _clamp_row(self, row: int) -> int:
        return max(0, min(row, len(self.lines) - 1))

    def _insert_text(self, row: int, col: int, text: str) -> Cursor:
        """Insert ``text`` at ``(row, col)`` and return the position after it."""

        line = self.lines[row]
        head = slice_bytes(line, 0, col)
        tail = slice_bytes(line, col)
        pieces = text.split("\n")
        if len(pieces) == 1:
            self.lines[row] = head + text + tail
            return row, byte_len(head + text)
        new_lines = [head + pieces[0], *pieces[1:-1], pieces[-1] + tail]
        self.lines[row : row + 1] = new_lines
        end_row = row + len(new_lines) - 1
        return end_row, byte_len(pieces[-1])

    def _splice(
        self,
        start_row: int,
        start_col: int,
        end_row: int,
        end_col: int,
        replacement: str = "",
    ) -> None:
        head = slice_bytes(self.lines[start_row], 0, start_col)
        tail = slice_bytes(self.lines[end_row], end_col)
        self.lines[start_row : end_row + 1] = [head + replacement + tail]

    def _rest_on_character(self) -> None:
        """Outside Insert mode the cursor sits on a character, never past it."""

        line = self.current_line
        if self.col > 0 and self.col >= byte_len(line):
            self.col = last_char_index(line)


__all__ = ["BufferValidationError", "InputBuffer", "ensure_cursor"]
