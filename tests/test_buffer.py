from __future__ import annotations

from typing import Iterable

import pytest

from vim_input import (
    NO_OP,
    Action,
    Backspace,
    Batch,
    ChangeMode,
    ClearInput,
    CommandOutput,
    DeleteLine,
    DeleteRange,
    InputBuffer,
    InsertChar,
    InsertNewline,
    ModeManager,
    MoveCursor,
    PasteAfter,
    PasteBefore,
    ReplaceChar,
    Submit,
    Undo,
    VimState,
)
from vim_input.buffer import BufferValidationError, BufferView


def make_buffer(text: str, cursor: tuple[int, int] = (0, 0), *, insert: bool = False) -> InputBuffer:
    buffer = InputBuffer(text, cursor)
    if insert:
        buffer.apply(ChangeMode(VimState.INSERT))
    return buffer


def run(manager: ModeManager, buffer: InputBuffer, keys: Iterable[str]) -> Action:
    action: Action = NO_OP
    for key in keys:
        action = manager.handle_key(key, False, buffer.lines, buffer.row, buffer.col)
        buffer.apply(action)
    return action


def test_cursor_is_validated() -> None:
    with pytest.raises(BufferValidationError):
        InputBuffer("héllo", (0, 2))
    with pytest.raises(BufferValidationError) as excinfo:
        InputBuffer("abc", (3, 0))
    assert excinfo.value.cursor == (3, 0)


def test_view_clamps_out_of_range_cursor() -> None:
    view = BufferView.build(["héllo"], 7, 2)

    assert view.cursor == (0, 1)
    assert BufferView.build([], 0, 0).lines == ("",)


def test_typing_and_newline_in_insert_mode() -> None:
    buffer = make_buffer("abcd", (0, 2), insert=True)

    buffer.apply(Batch((InsertChar("X"), InsertNewline(), InsertChar("é"))))

    assert buffer.lines == ["abX", "écd"]
    assert buffer.cursor == (1, 2)


def test_backspace_at_column_zero_joins_lines() -> None:
    buffer = make_buffer("ab\ncd", (1, 0), insert=True)

    buffer.apply(Backspace())

    assert buffer.lines == ["abcd"]
    assert buffer.cursor == (0, 2)


def test_delete_range_across_lines() -> None:
    buffer = make_buffer("hello\nworld", (0, 0))

    buffer.apply(DeleteRange(0, 3, 1, 3))

    assert buffer.lines == ["helld"]
    assert buffer.cursor == (0, 3)


def test_delete_last_line_leaves_empty_buffer() -> None:
    buffer = make_buffer("only")

    buffer.apply(DeleteLine(0))

    assert buffer.lines == [""]
    assert buffer.cursor == (0, 0)


def test_leaving_insert_moves_cursor_back() -> None:
    buffer = make_buffer("abc", (0, 3), insert=True)

    buffer.apply(ChangeMode(VimState.NORMAL))

    assert buffer.cursor == (0, 2)
    assert buffer.mode is VimState.NORMAL


def test_normal_mode_cursor_rests_on_a_character() -> None:
    buffer = make_buffer("abc")

    buffer.apply(MoveCursor(0, 3))

    assert buffer.cursor == (0, 2)


def test_replace_char_swaps_multibyte_character() -> None:
    buffer = make_buffer("héllo")

    buffer.apply(ReplaceChar(0, 1, "e"))

    assert buffer.text == "hello"


def test_charwise_paste_after_and_before() -> None:
    after = make_buffer("ac")
    after.apply(PasteAfter("b"))
    before = make_buffer("bc")
    before.apply(PasteBefore("a"))

    assert after.text == "abc"
    assert after.cursor == (0, 1)
    assert before.text == "abc"
    assert before.cursor == (0, 0)


def test_linewise_paste_places_whole_lines() -> None:
    buffer = make_buffer("one\nthree", (0, 1))

    buffer.apply(PasteAfter("two", linewise=True))
    buffer.apply(PasteBefore("zero", linewise=True))

    assert buffer.lines == ["one", "zero", "two", "three"]
    assert buffer.cursor == (1, 0)


def test_signals_are_queued_for_the_host() -> None:
    buffer = make_buffer("abc")

    buffer.apply(Batch((Submit(), Undo(), CommandOutput("Paste mode ON"))))

    assert buffer.drain_signals() == [Submit(), Undo(), CommandOutput("Paste mode ON")]
    assert buffer.drain_signals() == []
    assert buffer.text == "abc"


def test_clear_input_resets_buffer() -> None:
    buffer = make_buffer("one\ntwo", (1, 1))

    buffer.apply(ClearInput())

    assert buffer.lines == [""]
    assert buffer.cursor == (0, 0)


def test_unknown_action_is_rejected() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(TypeError):
        buffer.apply("x")  # type: ignore[arg-type]


def test_delete_word_then_paste_before_restores_line() -> None:
    """`P` puts the text back at the cursor; `p` would put it after the `w`."""

    manager = ModeManager()
    buffer = make_buffer("hello world")

    run(manager, buffer, "dw")
    assert buffer.text == "world"

    run(manager, buffer, "P")
    assert buffer.text == "hello world"


def test_delete_word_then_paste_after_follows_cursor_character() -> None:
    manager = ModeManager()
    buffer = make_buffer("hello world")

    run(manager, buffer, "dw")
    action = run(manager, buffer, "p")

    assert action == PasteAfter("hello ", False)
    assert buffer.text == "whello orld"


def test_yy_then_p_duplicates_line_below() -> None:
    manager = ModeManager()
    buffer = make_buffer("one\ntwo")

    run(manager, buffer, "yyp")

    assert buffer.lines == ["one", "one", "two"]
    assert buffer.cursor == (1, 0)


def test_open_line_typing_and_escape() -> None:
    manager = ModeManager()
    buffer = make_buffer("hello")

    run(manager, buffer, ["o", "h", "i", "\x1b"])

    assert buffer.lines == ["hello", "hi"]
    assert buffer.cursor == (1, 1)
    assert buffer.mode is VimState.NORMAL


def test_open_line_above() -> None:
    manager = ModeManager()
    buffer = make_buffer("hello", (0, 3))

    run(manager, buffer, ["O", "x", "\x1b"])

    assert buffer.lines == ["x", "hello"]
    assert buffer.cursor == (0, 0)


def test_append_at_line_end() -> None:
    manager = ModeManager()
    buffer = make_buffer("abc")

    run(manager, buffer, ["A", "d", "\x1b"])

    assert buffer.text == "abcd"
    assert buffer.cursor == (0, 3)
