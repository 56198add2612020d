from __future__ import annotations

from typing import Any, Dict, List

from vim_input import InputBuffer, Submit
from vim_input.adapters.textual import TextualUIHooks, TextualVimAdapter, translate_key
from vim_input.modes.mode_manager import ModeManager


def make_manager() -> ModeManager:
    return ModeManager()


def test_translate_key_maps_textual_names() -> None:
    assert translate_key("escape") == ("\x1b", False)
    assert translate_key("enter") == ("\r", False)
    assert translate_key("backspace") == ("\x7f", False)
    assert translate_key("ctrl+r") == ("r", True)
    assert translate_key("ctrl+left_square_bracket") == ("[", True)
    assert translate_key("space", " ") == (" ", False)
    assert translate_key("a", "a") == ("a", False)
    assert translate_key("up") is None
    assert translate_key("ctrl+up") is None


def test_adapter_updates_buffer_and_status() -> None:
    manager = make_manager()
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda buffer: updates.append(buffer.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualVimAdapter(manager, hooks, InputBuffer("world"))

    adapter.handle_textual_key("i", character="i")
    adapter.handle_textual_key("h", character="h")
    adapter.handle_textual_key("escape")

    assert updates[-1] == "hworld"
    assert "-- INSERT --" in statuses
    assert statuses[-1] == "-- NORMAL --"
    assert adapter.buffer.cursor == (0, 0)


def test_adapter_relays_command_events() -> None:
    manager = make_manager()
    command_lines: List[str] = []
    events: List[tuple[str, object | None]] = []
    signals: List[object] = []
    hooks = TextualUIHooks(
        update_buffer=lambda buffer: None,
        show_command=lambda text: command_lines.append(text),
        handle_event=lambda name, payload: events.append((name, payload)),
        handle_signal=signals.append,
        update_status=lambda status: None,
    )
    adapter = TextualVimAdapter(manager, hooks)

    adapter.handle_textual_key("colon", character=":")
    adapter.handle_textual_key("w", character="w")
    adapter.handle_textual_key("q", character="q")
    assert command_lines[-1] == "wq"
    adapter.handle_textual_key("enter")

    assert command_lines[-1] == ""
    assert ("command.submit", "wq") in events
    assert signals == [Submit()]


def test_adapter_collects_command_output() -> None:
    manager = make_manager()
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda buffer: None,
        update_status=statuses.append,
    )
    adapter = TextualVimAdapter(manager, hooks)

    for char in ":set paste":
        adapter.handle_textual_key(char, character=char)
    adapter.handle_textual_key("enter")

    assert adapter.messages == ["Paste mode ON"]
    assert "Paste mode ON" in statuses
    assert manager.paste_mode is True


def test_adapter_surfaces_visual_selection_events() -> None:
    manager = make_manager()
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda buffer: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
        update_status=lambda status: None,
    )
    adapter = TextualVimAdapter(manager, hooks, InputBuffer("hello"))

    adapter.handle_textual_key("v", character="v")
    adapter.handle_textual_key("l", character="l")

    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads
    assert visual_payloads[-1]["payload"] == {"anchor": (0, 0), "cursor": (0, 1)}


def test_adapter_ignores_unmapped_textual_keys() -> None:
    manager = make_manager()
    hooks = TextualUIHooks(update_buffer=lambda buffer: None)
    adapter = TextualVimAdapter(manager, hooks, InputBuffer("abc"))

    adapter.handle_textual_key("f5")

    assert adapter.buffer.text == "abc"
    assert manager.state().value == "normal"


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda buffer: None,
        update_status=lambda status: None,
        show_command=lambda _: None,
        handle_event=lambda _name, _payload: None,
        log=lambda line: logs.append(line),
    )
    adapter = TextualVimAdapter(manager, hooks)

    adapter.handle_textual_key("i", character="i")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("action <-") for line in logs)
