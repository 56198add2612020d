from __future__ import annotations

from typing import Iterable

from vim_input import (
    NO_OP,
    Action,
    ChangeMode,
    ClearInput,
    CommandOutput,
    ModeManager,
    Submit,
    VimState,
)

LINES = ["hello"]


def make_manager() -> ModeManager:
    return ModeManager()


def press(manager: ModeManager, keys: Iterable[str]) -> Action:
    action: Action = NO_OP
    for key in keys:
        action = manager.handle_key(key, False, LINES, 0, 0)
    return action


def test_backspace_edits_before_submit() -> None:
    manager = make_manager()

    action = press(manager, [":", "w", "q", "\x7f", "\r"])

    assert action == Submit()
    assert manager.state() is VimState.NORMAL
    assert manager.command_buffer == ""


def test_command_table() -> None:
    cases = {
        "w": Submit(),
        "q": ClearInput(),
        "wq": Submit(),
        "set paste": CommandOutput("Paste mode ON"),
        "set nopaste": CommandOutput("Paste mode OFF"),
    }
    for command, expected in cases.items():
        manager = make_manager()

        action = press(manager, [":", *command, "\r"])

        assert action == expected, command
        assert manager.state() is VimState.NORMAL


def test_paste_mode_flag_follows_set_commands() -> None:
    manager = make_manager()

    press(manager, [":", *"set paste", "\r"])
    assert manager.paste_mode is True

    press(manager, [":", *"set nopaste", "\r"])
    assert manager.paste_mode is False


def test_unknown_command_reports_and_returns_to_normal() -> None:
    manager = make_manager()

    action = press(manager, [":", *"foo", "\r"])

    assert action == CommandOutput("Unknown command: foo")
    assert manager.state() is VimState.NORMAL


def test_surrounding_whitespace_is_trimmed() -> None:
    manager = make_manager()

    action = press(manager, [":", *"  wq ", "\r"])

    assert action == Submit()


def test_inner_whitespace_is_kept_verbatim() -> None:
    manager = make_manager()

    action = press(manager, [":", *"set  paste", "\r"])

    assert action == CommandOutput("Unknown command: set  paste")
    assert manager.paste_mode is False

    action = press(manager, [":", *"foo   bar", "\r"])

    assert action == CommandOutput("Unknown command: foo   bar")


def test_command_buffer_tracks_typed_text() -> None:
    manager = make_manager()

    press(manager, [":", "a", "b"])

    assert manager.command_buffer == "ab"
    assert manager.state() is VimState.COMMAND


def test_backspace_on_empty_line_cancels() -> None:
    manager = make_manager()

    action = press(manager, [":", "\x7f"])

    assert action == ChangeMode(VimState.NORMAL)
    assert manager.state() is VimState.NORMAL


def test_escape_cancels_command_line() -> None:
    manager = make_manager()

    action = press(manager, [":", "w", "\x1b"])

    assert action == ChangeMode(VimState.NORMAL)
    assert manager.state() is VimState.NORMAL
    assert manager.command_buffer == ""


def test_empty_submit_returns_to_normal() -> None:
    manager = make_manager()

    action = press(manager, [":", "\r"])

    assert action == ChangeMode(VimState.NORMAL)


def test_submit_event_carries_trimmed_command() -> None:
    manager = make_manager()
    submitted: list[object] = []
    manager.context.bus.subscribe("command.submit", submitted.append)

    press(manager, [":", "w", "q", "\r"])

    assert submitted == ["wq"]
