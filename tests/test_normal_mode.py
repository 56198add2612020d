from __future__ import annotations

from typing import Iterable, Sequence

from vim_input import (
    NO_OP,
    Action,
    Batch,
    ChangeMode,
    DeleteRange,
    InsertNewline,
    ModeManager,
    MoveCursor,
    PasteAfter,
    Redo,
    ReplaceChar,
    Undo,
    VimState,
)


def make_manager() -> ModeManager:
    return ModeManager()


def press(
    manager: ModeManager,
    keys: Iterable[str],
    lines: Sequence[str],
    row: int = 0,
    col: int = 0,
) -> Action:
    """Feed ``keys`` against one unchanging snapshot and return the last action."""

    action: Action = NO_OP
    for key in keys:
        action = manager.handle_key(key, False, lines, row, col)
    return action


def test_k_scenario_clamps_to_previous_line() -> None:
    manager = make_manager()

    action = press(manager, "k", ["hello", "world"], 1, 0)

    assert action == MoveCursor(0, 0)


def test_capital_g_moves_to_last_character_of_last_line() -> None:
    manager = make_manager()

    action = press(manager, "G", ["one", "two", "three"])

    assert action == MoveCursor(2, 4)


def test_gg_waits_for_second_key() -> None:
    manager = make_manager()
    lines = ["one", "two"]

    assert press(manager, "g", lines, 1, 2) == NO_OP
    assert press(manager, "g", lines, 1, 2) == MoveCursor(0, 0)


def test_count_prefix_repeats_motion() -> None:
    manager = make_manager()

    action = press(manager, "3l", ["hello world"])

    assert action == MoveCursor(0, 3)


def test_multi_digit_count() -> None:
    manager = make_manager()

    action = press(manager, "10l", ["hello world"])

    assert action == MoveCursor(0, 10)


def test_zero_without_count_is_line_start() -> None:
    manager = make_manager()

    action = press(manager, "0", ["hello world"], 0, 5)

    assert action == MoveCursor(0, 0)


def test_l_never_rests_past_last_character() -> None:
    manager = make_manager()

    action = press(manager, "l", ["abc"], 0, 2)

    assert action == MoveCursor(0, 2)


def test_unmapped_key_clears_count() -> None:
    manager = make_manager()

    action = press(manager, "3Ql", ["hello world"])

    assert action == MoveCursor(0, 1)


def test_find_character_moves_cursor() -> None:
    manager = make_manager()
    lines = ["hello world"]

    assert press(manager, "fo", lines) == MoveCursor(0, 4)
    assert press(manager, "2fo", lines) == MoveCursor(0, 7)
    assert press(manager, "Fo", lines, 0, 7) == MoveCursor(0, 4)
    assert press(manager, "fz", lines) == NO_OP


def test_escape_cancels_pending_find() -> None:
    manager = make_manager()
    lines = ["hello world"]

    assert press(manager, ["f", "\x1b"], lines) == NO_OP
    assert press(manager, "l", lines) == MoveCursor(0, 1)


def test_control_key_cancels_pending_character_argument() -> None:
    manager = make_manager()
    lines = ["hello"]

    press(manager, "r", lines)
    action = manager.handle_key("x", True, lines, 0, 0)

    assert action == NO_OP
    assert press(manager, "l", lines) == MoveCursor(0, 1)


def test_replace_character() -> None:
    manager = make_manager()

    action = press(manager, "rx", ["hello"], 0, 1)

    assert action == ReplaceChar(0, 1, "x")


def test_x_deletes_one_character_and_yanks_it() -> None:
    manager = make_manager()

    action = press(manager, "x", ["hello"], 0, 2)

    assert action == DeleteRange(0, 2, 0, 3)
    assert manager.register == "l"
    assert manager.register_linewise is False


def test_x_with_count_stops_at_line_end() -> None:
    manager = make_manager()

    action = press(manager, "9x", ["hello"], 0, 3)

    assert action == DeleteRange(0, 3, 0, 5)
    assert manager.register == "lo"


def test_x_past_end_of_line_is_noop() -> None:
    manager = make_manager()

    action = press(manager, "x", ["hello"], 0, 5)

    assert action == NO_OP
    assert manager.register == ""
    assert manager.last_command is None


def test_x_on_multibyte_character_deletes_whole_character() -> None:
    manager = make_manager()

    action = press(manager, "x", ["héllo"], 0, 1)

    assert action == DeleteRange(0, 1, 0, 3)
    assert manager.register == "é"


def test_paste_with_empty_register_is_noop() -> None:
    manager = make_manager()

    assert press(manager, "p", ["hello"]) == NO_OP


def test_paste_carries_register_text() -> None:
    manager = make_manager()
    lines = ["hello"]

    press(manager, "x", lines)
    action = press(manager, "p", lines)

    assert action == PasteAfter("h", False)


def test_undo_and_redo_are_signals() -> None:
    manager = make_manager()
    lines = ["hello"]

    assert press(manager, "u", lines) == Undo()
    assert manager.handle_key("r", True, lines, 0, 0) == Redo()
    assert manager.handle_key("\x12", True, lines, 0, 0) == Redo()


def test_insert_entry_points_prime_cursor() -> None:
    lines = ["  hello"]
    insert = ChangeMode(VimState.INSERT)

    assert press(make_manager(), "i", lines, 0, 3) == insert
    assert press(make_manager(), "a", lines, 0, 3) == Batch((MoveCursor(0, 4), insert))
    assert press(make_manager(), "A", lines, 0, 3) == Batch((MoveCursor(0, 7), insert))
    assert press(make_manager(), "I", lines, 0, 5) == Batch((MoveCursor(0, 2), insert))


def test_open_line_below_and_above() -> None:
    lines = ["hello"]
    insert = ChangeMode(VimState.INSERT)

    below = press(make_manager(), "o", lines, 0, 2)
    above = press(make_manager(), "O", lines, 0, 2)

    assert below == Batch((MoveCursor(0, 5), InsertNewline(), insert))
    assert above == Batch((MoveCursor(0, 0), InsertNewline(), MoveCursor(0, 0), insert))


def test_mode_entry_keys_switch_state() -> None:
    manager = make_manager()

    assert press(manager, "v", ["hello"]) == ChangeMode(VimState.VISUAL)
    assert manager.state() is VimState.VISUAL

    manager = make_manager()
    assert press(manager, ":", ["hello"]) == ChangeMode(VimState.COMMAND)
    assert manager.state() is VimState.COMMAND


def test_mode_labels() -> None:
    assert VimState.INSERT.label == "-- INSERT --"
    assert str(VimState.NORMAL) == "-- NORMAL --"
