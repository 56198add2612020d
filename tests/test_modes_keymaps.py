from __future__ import annotations

from typing import Any, Dict

import pytest

from vim_input.actions import NO_OP, ChangeMode, MoveCursor, VimState
from vim_input.buffer import BufferView
from vim_input.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
)
from vim_input.keymaps.defaults import load_default_keymaps
from vim_input.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
    VisualMode,
)


def make_context(
    registry: KeymapRegistry,
    resolver: KeymapResolver,
    *,
    lines: tuple[str, ...] = ("hello world",),
) -> ModeContext:
    extras: Dict[str, Any] = {
        "keymap_registry": registry,
        "keymap_resolver": resolver,
    }
    return ModeContext(
        bus=ModeBus(),
        view=BufferView.build(lines, 0, 0),
        extras=extras,
    )


def make_defaults() -> tuple[KeymapRegistry, KeymapResolver]:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return registry, KeymapResolver(registry)


def test_normal_mode_uses_keymap_binding() -> None:
    registry, resolver = make_defaults()
    context = make_context(registry, resolver)
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="i"))

    assert result.switch_to == "insert"
    assert result.action == ChangeMode(VimState.INSERT)
    assert result.consumed is True


def test_insert_mode_escape_binding() -> None:
    registry, resolver = make_defaults()
    context = make_context(registry, resolver)
    mode = InsertMode(context)

    result = mode.handle_key(KeyInput.from_raw("\x1b"))

    assert result.switch_to == "normal"
    assert result.consumed is True


def test_key_input_folds_control_characters() -> None:
    assert KeyInput.from_raw("\x12", ctrl=True).token == "ctrl+r"
    assert KeyInput.from_raw("\x1b", ctrl=True).token == "ctrl+["
    assert KeyInput.from_raw("\r").token == "enter"
    assert KeyInput.from_raw("\x7f").token == "backspace"
    assert KeyInput.from_raw("é").is_text is True
    assert KeyInput.from_raw("\x1b").is_text is False


def test_normal_mode_pending_sequence() -> None:
    registry, resolver = make_defaults()
    context = make_context(registry, resolver)
    mode = NormalMode(context)

    pending = mode.handle_key(KeyInput(key="g"))
    assert pending.status == "pending"
    assert pending.consumed is True

    match = mode.handle_key(KeyInput(key="g"))
    assert match.action == MoveCursor(0, 0)


def test_custom_binding_runs_custom_action() -> None:
    registry, resolver = make_defaults()
    calls: list[str] = []

    def shout(context: ModeContext, match) -> ModeResult:
        calls.append(match.binding.id)
        return ModeResult(status="shout")

    registry.register_action(ActionRef(id="custom.shout", handler=shout))
    registry.register_binding(
        Binding(
            id="normal.shout",
            mode="normal",
            sequence=KeySequence.from_strings("Z", "Z"),
            action_id="custom.shout",
        )
    )
    context = make_context(registry, resolver)
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="Z"))
    result = mode.handle_key(KeyInput(key="Z"))

    assert result.status == "shout"
    assert calls == ["normal.shout"]


def test_mode_manager_registers_every_mode_by_default() -> None:
    manager = ModeManager()

    assert manager.active_mode is not None
    assert manager.active_mode.name == "normal"
    assert manager.state() is VimState.NORMAL
    assert manager.context.extras["mode_manager"] is manager


def test_mode_manager_switches_to_visual_mode() -> None:
    registry, resolver = make_defaults()
    context = make_context(registry, resolver)
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
        register_defaults=False,
    )
    manager.register_mode(NormalMode)
    manager.register_mode(VisualMode)

    action = manager.handle_key("v", lines=("hello",), cursor_row=0, cursor_col=3)

    assert action == ChangeMode(VimState.VISUAL)
    assert manager.active_mode and manager.active_mode.name == "visual"
    assert manager.visual_anchor == (0, 3)


def test_mode_manager_rejects_duplicate_modes() -> None:
    manager = ModeManager()

    with pytest.raises(ValueError, match="command"):
        manager.register_mode(CommandMode)


def test_mode_switch_events_reach_bus_subscribers() -> None:
    manager = ModeManager()
    switches: list[object] = []
    manager.context.bus.subscribe("mode.switch", switches.append)

    manager.handle_key("i")
    manager.handle_key("\x1b")

    assert switches == ["insert", "normal"]


def test_empty_key_is_ignored() -> None:
    manager = ModeManager()

    action = manager.handle_key("", lines=("abc",))

    assert action == NO_OP
    assert manager.state() is VimState.NORMAL
