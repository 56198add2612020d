from __future__ import annotations

from typing import Iterable

from vim_input import (
    NO_OP,
    Action,
    Backspace,
    Batch,
    InputBuffer,
    InsertChar,
    ModeManager,
    VimState,
)


def make_session(text: str, cursor: tuple[int, int] = (0, 0)) -> tuple[ModeManager, InputBuffer]:
    return ModeManager(), InputBuffer(text, cursor)


def run(manager: ModeManager, buffer: InputBuffer, keys: Iterable[str]) -> Action:
    """Feed ``keys`` one at a time, applying each action to ``buffer``."""

    action: Action = NO_OP
    for key in keys:
        action = manager.handle_key(key, False, buffer.lines, buffer.row, buffer.col)
        buffer.apply(action)
    return action


def test_x_then_dot_twice_deletes_three_characters() -> None:
    manager, buffer = make_session("abcdef", (0, 1))

    run(manager, buffer, "x..")

    assert buffer.text == "aef"
    assert buffer.cursor == (0, 1)


def test_dot_uses_current_cursor_not_recorded_one() -> None:
    manager, buffer = make_session("abcdef")

    run(manager, buffer, "x$.")

    assert buffer.text == "bcde"


def test_dot_reuses_recorded_count() -> None:
    manager, buffer = make_session("abcdefgh")

    run(manager, buffer, "3x.")

    assert buffer.text == "gh"


def test_count_given_to_dot_replaces_recorded_count() -> None:
    manager, buffer = make_session("abcdefgh")

    run(manager, buffer, "x2.")

    assert buffer.text == "defgh"


def test_dot_repeats_operator_with_motion() -> None:
    manager, buffer = make_session("one two three")

    run(manager, buffer, "dw.")

    assert buffer.text == "three"
    assert manager.register == "two "


def test_dot_repeats_linewise_delete() -> None:
    manager, buffer = make_session("a\nb\nc")

    run(manager, buffer, "dd.")

    assert buffer.lines == ["c"]


def test_dot_repeats_change_with_typed_text() -> None:
    manager, buffer = make_session("foo bar baz")

    run(manager, buffer, ["c", "w", "X", "\x1b", "w", "."])

    assert buffer.text == "Xbar X"
    assert manager.state() is VimState.NORMAL


def test_dot_after_visual_change_replays_typed_text_only() -> None:
    manager, buffer = make_session("abc def")

    run(manager, buffer, ["v", "l", "c", "X", "\x1b", "w", "."])

    assert buffer.text == "Xbc Xdef"
    assert manager.state() is VimState.NORMAL


def test_dot_replays_insert_keystrokes() -> None:
    manager, buffer = make_session("")

    run(manager, buffer, ["i", "a", "b", "\x7f", "c", "\x1b"])
    action = run(manager, buffer, ".")

    assert action == Batch((InsertChar("a"), InsertChar("b"), Backspace(), InsertChar("c")))
    assert buffer.text == "aacc"


def test_insert_with_no_typing_is_not_recorded() -> None:
    manager, buffer = make_session("abc")

    run(manager, buffer, "x")
    run(manager, buffer, ["i", "\x1b"])
    run(manager, buffer, ".")

    assert buffer.text == "c"


def test_dot_repeats_replace_character() -> None:
    manager, buffer = make_session("hello")

    run(manager, buffer, "rxl.")

    assert buffer.text == "xxllo"


def test_dot_without_history_is_noop() -> None:
    manager, buffer = make_session("hello")

    action = run(manager, buffer, ".")

    assert action == NO_OP
    assert buffer.text == "hello"


def test_dot_keeps_last_command_after_replay() -> None:
    manager, buffer = make_session("one two three four")

    run(manager, buffer, "dw.")
    recorded = manager.last_command

    run(manager, buffer, ".")

    assert manager.last_command == recorded
    assert buffer.text == "four"


def test_dot_replay_event_reaches_bus() -> None:
    manager, buffer = make_session("abc")
    replays: list[object] = []
    manager.context.bus.subscribe("dot.replay", replays.append)

    run(manager, buffer, "x.")

    assert len(replays) == 1
